"""bookcircle - a community book catalogue with ratings and reviews."""

__version__ = "0.1.0"
