"""Entity descriptors for models queried through torm."""


class Entity:
    """Mixin giving a model a stable registry name.

    Declare ``__entity_name__`` to choose the name explicitly; otherwise the
    class name is used. Names are always lower-cased.
    """

    __entity_name__ = None

    @classmethod
    def entity_name(cls) -> str:
        return (cls.__entity_name__ or cls.__name__).lower()
