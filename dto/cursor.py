from pydantic import BaseModel


class Cursor(BaseModel):
    """Write position inside the active worksheet (1-based row / col)."""

    sheet: str = ""
    row: int = 0
    col: int = 1
