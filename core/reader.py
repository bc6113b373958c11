"""Base report reader abstraction"""
import abc

from core.report import Report


class ReportReader(abc.ABC):
    @abc.abstractmethod
    def read(self) -> Report:
        """Return the header and the ordered physical/virtual entries."""
        raise NotImplementedError
