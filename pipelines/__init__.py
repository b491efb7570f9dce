from .report_pipeline import report_pipeline

__all__ = ["report_pipeline"]
