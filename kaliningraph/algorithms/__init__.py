"""algorithms package: closure and path problems as semiring matrix fixpoints."""

__all__ = ["paths"]
