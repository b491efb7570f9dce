from .bootstrap import apply_global_settings

__all__ = ["apply_global_settings"]
