import pytest

from core.buttons import (
    Encoder,
    MicrostickModeSwitch,
    Momentary,
    PhysicalButton,
    Pov,
    Shift1,
    Shift2,
    ShiftKind,
    Tempo,
    TempoKind,
    Undefined,
)
from core.errors import MalformedIdentifier, UnrecognizedDescription
from vkb.classifier import (
    PHYSICAL_KIND_RULES,
    classify_kind,
    classify_physical,
    parse_button_id,
    parse_virtual_description,
)


@pytest.mark.parametrize("text, expected", [
    ("#1 (E1) ", (1, "(E1)")),
    ("#2  - Encoder 2/4", (2, "- Encoder 2/4")),
    ("#95 ", (95, "")),
    ("#7", (7, "")),
])
def test_parse_button_id(text, expected):
    assert parse_button_id(text) == expected


@pytest.mark.parametrize("text", ["1 (E1)", "#x1 (E1) ", "#256 ", "# (E1)"])
def test_parse_button_id_malformed(text):
    with pytest.raises(MalformedIdentifier):
        parse_button_id(text)


@pytest.mark.parametrize("button_id, info", [(1, "(E2)"), (42, "(Fire 2-nd stage)"), (127, "")])
def test_momentary_without_shift(button_id, info):
    desc = f"<b>#{button_id} {info} </b><b>- Button with momentary action</b>"
    button = classify_physical(desc)
    assert button == PhysicalButton(button_id, Momentary(shift=None), info, "- Button with momentary action")


@pytest.mark.parametrize("desc, expected", [
    (
        "<b>#3 (E2) </b><b>- Button with momentary action</b>",
        PhysicalButton(3, Momentary(), "(E2)", "- Button with momentary action"),
    ),
    (
        "<b>#4 </b><b>- Button with momentary action</b>",
        PhysicalButton(4, Momentary(), "", "- Button with momentary action"),
    ),
    (
        "<b>#10 (Fire 1-st stage) </b><b>- Button with momentary action</b>\r\n"
        "Virtual button with SHIFT1 = 64\r\nVirtual button with SHIFT2 = 91",
        PhysicalButton(10, Momentary(ShiftKind(64, 91)), "(Fire 1-st stage)", "- Button with momentary action"),
    ),
    (
        "<b>#35 (Rapid fire forward) </b><b>- Button with momentary action</b>\r\nVirtual button with SHIFT1 = 37",
        PhysicalButton(35, Momentary(ShiftKind(button_id_shift1=37)), "(Rapid fire forward)", "- Button with momentary action"),
    ),
    (
        "<b>#36 (Rapid fire back) </b><b>- Button with momentary action</b>\r\nVirtual button with SHIFT2 = 99",
        PhysicalButton(36, Momentary(ShiftKind(button_id_shift2=99)), "(Rapid fire back)", "- Button with momentary action"),
    ),
    (
        "<b>#5 (F3) </b><b>TEMPO </b>\r\nVirtual button Short #5\r\nVirtual button Long #94",
        PhysicalButton(5, Tempo(TempoKind(5, 94)), "(F3)", "TEMPO"),
    ),
    (
        "<b>#11 (D1) </b><b> SHIFT1 </b>",
        PhysicalButton(11, Shift1(), "(D1)", "SHIFT1"),
    ),
    (
        "<b>#12 (D2) </b><b> SHIFT2 alternate action</b>",
        PhysicalButton(12, Shift2(), "(D2)", "SHIFT2 alternate action"),
    ),
    (
        "<b>#18 (A1 down) </b> <b>Point of view Switch</b> POV1  Down",
        PhysicalButton(18, Pov("Down"), "(A1 down)", "Point of view Switch"),
    ),
    (
        "<b>#37 </b><b> No defined function</b>",
        PhysicalButton(37, Undefined(), "", "No defined function"),
    ),
    (
        "<b>#30 (Ministick push) </b><b>Microstick Mode Switch </b>\r\n Switch Mode:",
        PhysicalButton(30, MicrostickModeSwitch(), "(Ministick push)", "Microstick Mode Switch"),
    ),
])
def test_classify_physical(desc, expected):
    assert classify_physical(desc) == expected


def test_tempo2_and_tempo3():
    base = "<b>#6 (F1) </b><b>TEMPO </b>\r\nVirtual button Short #6\r\nVirtual button Long #96"
    assert classify_physical(base).kind == Tempo(TempoKind(6, 96))

    button = classify_physical(base + "\r\nVirtual button Double Short #97")
    assert button.kind == Tempo(TempoKind(6, 96, 97))
    assert button.kind.tempo.name == "Tempo3"


def test_shift1_end_to_end():
    button = classify_physical("<b>#11 (D1) </b><b> SHIFT1 </b>")
    assert (button.id, button.kind, button.info) == (11, Shift1(), "(D1)")


def test_encoder_companion_ids_are_not_modifiers():
    # The listed ids are the encoder rotation buttons: no shift/tempo is extracted from them.
    button = classify_physical("<b>#1 (E1) </b> / <b>#2  - Encoder 2/4</b>\r\nVirtual buttons : #61 / #62")
    assert button.id == 1
    assert button.info == "(E1)"
    assert button.kind == Encoder(virtual_ids=(61, 62))
    assert not isinstance(button.kind, (Momentary, Tempo))


def test_escaped_description_is_unescaped():
    desc = "&lt;b&gt;#3 (E2) &lt;/b&gt;&lt;b&gt;- Button with momentary action&lt;/b&gt;"
    assert classify_physical(desc) == PhysicalButton(3, Momentary(), "(E2)", "- Button with momentary action")


@pytest.mark.parametrize("desc", [
    "",
    "<b>#12 (A2) </b><b>Something else entirely</b>",
    # band continued from the previous page: no id at all
    "<font color=\"#000000\">Virtual button with SHIFT1 = 63\r\nVirtual button with SHIFT2 = 92",
    "<b>#12 (A2) </b>",
    "<b>#5 (F3) </b><b>TEMPO </b>\r\nVirtual button Short #5",
    "<b>#5 (F3) </b><b>TEMPO </b>",
    "<b>#18 (A1 down) </b><b>Point of view Switch</b>",
    "<b>#1 </b><b>- Button with momentary action</b><b>again</b>",
    "<b>#3 (E2) </b><b>- Button with momentary action</b>\r\nVirtual button Short #5",
])
def test_unrecognized(desc):
    with pytest.raises(UnrecognizedDescription):
        classify_physical(desc)


def test_unrecognized_names_the_text():
    desc = "<b>#12 (A2) </b><b>Something else entirely</b>"
    with pytest.raises(UnrecognizedDescription) as excinfo:
        classify_physical(desc)
    assert excinfo.value.description == desc
    assert desc in str(excinfo.value)


@pytest.mark.parametrize("desc", [
    "<b>#x1 (A) </b><b>- Button with momentary action</b>",
    "<b>#300 </b><b>- Button with momentary action</b>",
    "<b>#10 </b><b>- Button with momentary action</b>\r\nVirtual button with SHIFT1 = sixty",
])
def test_malformed_identifier(desc):
    with pytest.raises(MalformedIdentifier):
        classify_physical(desc)


def test_rules_order():
    assert [rule.name for rule in PHYSICAL_KIND_RULES] == [
        "tempo", "encoder", "momentary", "shift1", "shift2", "pov", "undefined", "microstick_mode_switch",
    ]


def test_first_matching_rule_wins():
    texts = ["Virtual button Short #1\nVirtual button Long #2"]
    assert classify_kind("TEMPO Encoder", texts) == Tempo(TempoKind(1, 2))
    assert classify_kind(" - Encoder 2/4 Button with momentary action", []) == Encoder()


@pytest.mark.parametrize("keyword, texts, expected", [
    ("- Button with momentary action", [], Momentary()),
    ("- Button with momentary action", ["Virtual button with SHIFT2 = 80"], Momentary(ShiftKind(button_id_shift2=80))),
    (" SHIFT1 ", [], Shift1()),
    (" SHIFT2 alternate action", [], Shift2()),
    ("Point of view Switch", ["", "POV1  Left"], Pov("Left")),
    (" No defined function", [], Undefined()),
    ("Microstick Mode Switch ", ["Switch Mode:"], MicrostickModeSwitch()),
])
def test_each_rule(keyword, texts, expected):
    assert classify_kind(keyword, texts) == expected


def test_shift_markers_in_any_order():
    texts = ["Virtual button with SHIFT2 = 91\nVirtual button with SHIFT1 = 64"]
    assert classify_kind("- Button with momentary action", texts) == Momentary(ShiftKind(64, 91))


@pytest.mark.parametrize("desc, expected", [
    ("<b>#95 </b> Joystick button : #95", (95, 95)),
    ("<b>#6 </b> Joystick button : #52", (6, 52)),
])
def test_parse_virtual_description(desc, expected):
    assert parse_virtual_description(desc) == expected


@pytest.mark.parametrize("desc", ["Joystick button : #3", "<b>#3 </b> Something : #3"])
def test_parse_virtual_description_unrecognized(desc):
    with pytest.raises(UnrecognizedDescription):
        parse_virtual_description(desc)
