"""HTML attribute names and CSS values understood by ``StyleResolver``."""

STYLE_ATTR = "style"
COLSPAN_ATTR = "colspan"
SHEET_NAME_ATTR = "data-name"

# Custom style property carrying the cell value type, e.g. "value-type: float".
VALUE_TYPE_PROPERTY = "value-type"

WRAPPING_WHITE_SPACE = frozenset({"normal", "pre-wrap", "pre-line", "break-spaces"})
BREAK_WORD = "break-word"

BORDER_INHERIT = "inherit"
BORDER_OFF_VALUES = frozenset({"none", "hidden", "0", "0px", "initial", "unset"})
BORDER_LINE_STYLES = frozenset(
    {
        "solid",
        "dashed",
        "dotted",
        "double",
        "groove",
        "ridge",
        "inset",
        "outset",
        "thin",
        "medium",
        "thick",
    }
)

# Excel only understands "center" for vertical centering.
VERTICAL_ALIGN_ALIASES = {"middle": "center"}
