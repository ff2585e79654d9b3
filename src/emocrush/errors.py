class OutOfBounds(IndexError):
    """A grid position lies outside the grid dimensions."""

    def __init__(self, position, width: int, height: int):
        self.position = position
        self.width = width
        self.height = height
        super().__init__(f"Position {tuple(position)} outside {width}x{height} grid")


class InvalidConfiguration(ValueError):
    """Grid/palette settings that cannot produce a playable board."""
