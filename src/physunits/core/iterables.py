class ReprStrMixin:
    """A mixin class that provides support for `__repr__` and `__str__`.

    Subclasses customize `__str__` to give a simplified representation; this
    class builds the unambiguous representation from it.
    """

    def __str__(self) -> str:
        """A simplified representation of this object."""
        return ''

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        module = f"{self.__module__.replace('physunits.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({self})"


class Singleton:
    """A base class for classes with exactly one instance."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
