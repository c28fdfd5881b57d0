"""Models, validation, status conditions and error aggregation for Contour and Gateway API resources."""

__version__ = "0.1.0"