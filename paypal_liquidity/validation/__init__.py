"""Upload validation package."""

from paypal_liquidity.validation.validator import UploadValidator

__all__ = ["UploadValidator"]
