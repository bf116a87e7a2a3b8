from .dates import MONTH_NAMES, iter_months, month_name, pad2  # noqa

__all__ = ["MONTH_NAMES", "iter_months", "month_name", "pad2"]
