from .decision_logger import DecisionLogger

__all__ = ["DecisionLogger"]
