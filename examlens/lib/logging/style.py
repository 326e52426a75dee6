from pygments.style import Style
from pygments.token import Keyword, Name, Number, Punctuation, String


class LogStyle(Style):
    """Muted palette for JSON log extras, legible on dark terminals."""

    styles = {
        Name.Tag: "#5fafd7",
        String: "#87af87",
        String.Double: "#87af87",
        Number: "#d7af5f",
        Keyword.Constant: "#af87d7",
        Punctuation: "#808080",
    }
