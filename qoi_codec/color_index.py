from .qoi import QOI


class ColorIndex:
    """
    64-slot direct-mapped cache of recently seen colors.

    A color lives at ``QOI.color_hash(r, g, b, a)``; storing always
    overwrites whatever the slot held, so two colors that hash to the same
    slot evict each other. Every encode or decode call owns its own index.
    """

    __slots__ = ("_slots",)

    def __init__(self, fill=(0, 0, 0, 0)):
        # tuples are immutable, so one list of references is a private copy
        self._slots = [tuple(fill)] * QOI.QOI_INDEX_SIZE

    @classmethod
    def for_decode(cls, channels: int) -> "ColorIndex":
        """Index used by the decoder: 3-channel streams start with opaque slots."""
        if channels == 3:
            return cls((0, 0, 0, 255))
        return cls()

    def lookup(self, slot: int) -> tuple:
        return self._slots[slot]

    def store(self, color: tuple) -> int:
        """Write ``color`` into its slot and return the slot position."""
        slot = QOI.color_hash(*color)
        self._slots[slot] = color
        return slot

    def probe(self, color: tuple) -> bool:
        """True if the slot for ``color`` currently holds exactly this color."""
        return self._slots[QOI.color_hash(*color)] == color

    def __len__(self):
        return len(self._slots)
