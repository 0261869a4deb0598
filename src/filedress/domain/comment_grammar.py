from __future__ import annotations

"""
Comment Grammar Registry.

Maps file extensions to a tagged comment-style descriptor (line-only,
block-only, or both). The registry is a plain lookup table: new languages are
added with `register_comment_style` rather than by subclassing, and every
extension resolves to exactly one style. Extensions missing from the table are
reported as unsupported by callers instead of failing a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

# Literal prefixes must not be glued to an identifier ('fooR"' is not a raw string).
_NOT_AFTER_IDENT = r"(?<![A-Za-z0-9_])"


# -----------------------------------------------------------------------------
# STYLE DESCRIPTORS
# -----------------------------------------------------------------------------

class CommentKind(Enum):
    """Tag describing which comment forms a language supports."""
    LINE_ONLY = "line_only"
    BLOCK_ONLY = "block_only"
    BOTH = "both"


@dataclass(frozen=True)
class RawStringRule:
    """
    A string literal without backslash escapes that may span lines.

    Attributes:
        opener: Regex matching the opening token. The named group 'tag', when
                present, is substituted into `terminator`.
        terminator: Closing token, formatted with `tag`.
        doubled_quote_escape: Whether a doubled terminator stands for one
                              literal quote (C# verbatim strings).
    """
    opener: str
    terminator: str
    doubled_quote_escape: bool = False


@dataclass(frozen=True)
class CommentStyle:
    """
    Comment syntax of one language family.

    Attributes:
        kind: Which comment forms are available.
        line_prefix: Line comment opener (e.g. '#', '//').
        block_start: Block comment opener (e.g. '/*', '<!--').
        block_end: Block comment terminator (e.g. '*/', '-->').
        string_delimiters: Quote tokens that open string literals, longest first.
        multiline_strings: Subset of `string_delimiters` allowed to span lines.
        raw_strings: Escape-free literals with computed terminators.
        literal_patterns: Regexes for tokens copied verbatim (char literals,
                          unquoted CSS urls).
        line_prefix_needs_space: The line prefix only opens a comment at the
                                 start of a line or after whitespace.
    """
    kind: CommentKind
    line_prefix: Optional[str] = None
    block_start: Optional[str] = None
    block_end: Optional[str] = None
    string_delimiters: Tuple[str, ...] = ()
    multiline_strings: Tuple[str, ...] = ()
    raw_strings: Tuple[RawStringRule, ...] = ()
    literal_patterns: Tuple[str, ...] = ()
    line_prefix_needs_space: bool = False

    def __post_init__(self) -> None:
        has_line = bool(self.line_prefix)
        has_block = bool(self.block_start) and bool(self.block_end)
        expected = {
            CommentKind.LINE_ONLY: (True, False),
            CommentKind.BLOCK_ONLY: (False, True),
            CommentKind.BOTH: (True, True),
        }[self.kind]
        if (has_line, has_block) != expected:
            raise ValueError(f"Comment style delimiters do not match kind {self.kind.value}")

    @property
    def has_line(self) -> bool:
        return self.kind in (CommentKind.LINE_ONLY, CommentKind.BOTH)

    @property
    def has_block(self) -> bool:
        return self.kind in (CommentKind.BLOCK_ONLY, CommentKind.BOTH)

    @property
    def header_opener(self) -> str:
        """Token that starts a rendered path header."""
        if self.has_line:
            return self.line_prefix or ""
        return self.block_start or ""


def line_only(prefix: str, strings: Tuple[str, ...] = (), multiline: Tuple[str, ...] = (),
              **extra: Any) -> CommentStyle:
    return CommentStyle(CommentKind.LINE_ONLY, line_prefix=prefix,
                        string_delimiters=strings, multiline_strings=multiline, **extra)


def block_only(start: str, end: str, strings: Tuple[str, ...] = (), multiline: Tuple[str, ...] = (),
               **extra: Any) -> CommentStyle:
    return CommentStyle(CommentKind.BLOCK_ONLY, block_start=start, block_end=end,
                        string_delimiters=strings, multiline_strings=multiline, **extra)


def both(prefix: str, start: str, end: str,
         strings: Tuple[str, ...] = (), multiline: Tuple[str, ...] = (), **extra: Any) -> CommentStyle:
    return CommentStyle(CommentKind.BOTH, line_prefix=prefix, block_start=start, block_end=end,
                        string_delimiters=strings, multiline_strings=multiline, **extra)


# -----------------------------------------------------------------------------
# LANGUAGE FAMILIES
# -----------------------------------------------------------------------------

_QUOTES: Tuple[str, ...] = ('"', "'")

# C++11 R"delim( ... )delim", with optional encoding prefix.
CPP_RAW_STRING = RawStringRule(
    _NOT_AFTER_IDENT + r'(?:u8|u|U|L)?R"(?P<tag>[^()\\\s"]{0,16})\(', '){tag}"'
)
# C# @"..." and $@"..." verbatim strings: no escapes, "" is a quote.
CSHARP_VERBATIM_STRING = RawStringRule(
    _NOT_AFTER_IDENT + r'(?:\$@|@\$|@)"', '"', doubled_quote_escape=True
)
# Rust r"..." / r#"..."# / br"...".
RUST_RAW_STRING = RawStringRule(_NOT_AFTER_IDENT + r'b?r(?P<tag>#*)"', '"{tag}')
# Rust char literals; a bare quote is a lifetime and opens nothing.
RUST_CHAR_LITERAL = r"b?'(?:[^'\\\n]|\\(?:[nrt0\\'\"]|x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]{1,6}\}))'"
# Unquoted url(...) in stylesheets may contain '//'.
CSS_UNQUOTED_URL = r"(?<![\w-])url\([ \t]*(?![\"'])[^)\n]*\)"

C_FAMILY = both("//", "/*", "*/", strings=_QUOTES, raw_strings=(CPP_RAW_STRING,))
JAVA_STYLE = both("//", "/*", "*/", strings=('"""', '"', "'"), multiline=('"""',))
CSHARP_STYLE = both(
    "//", "/*", "*/",
    strings=('"""', '"', "'"), multiline=('"""',), raw_strings=(CSHARP_VERBATIM_STRING,),
)
JS_FAMILY = both("//", "/*", "*/", strings=("`", '"', "'"), multiline=("`",))
GO_STYLE = both("//", "/*", "*/", strings=("`", '"', "'"), multiline=("`",))
TRIPLE_QUOTE_C = both(
    "//", "/*", "*/",
    strings=('"""', "'''", '"', "'"), multiline=('"""', "'''"),
)
RUST_STYLE = both(
    "//", "/*", "*/",
    strings=('"',), multiline=('"',),
    raw_strings=(RUST_RAW_STRING,), literal_patterns=(RUST_CHAR_LITERAL,),
)
SCSS_STYLE = both("//", "/*", "*/", strings=_QUOTES, literal_patterns=(CSS_UNQUOTED_URL,))
CSS_STYLE = block_only("/*", "*/", strings=_QUOTES)
MARKUP_STYLE = block_only("<!--", "-->")
PYTHON_STYLE = line_only("#", strings=('"""', "'''", '"', "'"), multiline=('"""', "'''"))
# '#' inside a word is code here: ${#arr[@]}, $#list, key: a#b.
HASH_STYLE = line_only("#", strings=_QUOTES, line_prefix_needs_space=True)
POWERSHELL_STYLE = both("#", "<#", "#>", strings=_QUOTES)
SQL_STYLE = both("--", "/*", "*/", strings=_QUOTES)
LUA_STYLE = both("--", "--[[", "]]", strings=_QUOTES)


# -----------------------------------------------------------------------------
# REGISTRY
# -----------------------------------------------------------------------------

_REGISTRY: Dict[str, CommentStyle] = {}


def register_comment_style(extensions: Iterable[str], style: CommentStyle) -> None:
    """
    Bind one or more extensions to a comment style.

    Args:
        extensions: Extensions with or without a leading dot (case-insensitive).
        style: Style descriptor to associate.
    """
    for ext in extensions:
        _REGISTRY[normalize_extension(ext)] = style


def get_comment_style(extension: str) -> Optional[CommentStyle]:
    """
    Resolve the comment style of an extension.

    Returns:
        Optional[CommentStyle]: The registered style, or None when unsupported.
    """
    return _REGISTRY.get(normalize_extension(extension))


def supported_extensions() -> List[str]:
    """Get every registered extension, sorted."""
    return sorted(_REGISTRY)


def normalize_extension(extension: str) -> str:
    """Strip whitespace and leading dots, and lowercase an extension."""
    return (extension or "").strip().lstrip(".").lower()


register_comment_style(["c", "cpp", "h", "hpp"], C_FAMILY)
register_comment_style(["java"], JAVA_STYLE)
register_comment_style(["cs"], CSHARP_STYLE)
register_comment_style(["ts", "js", "jsx", "tsx", "mjs", "cjs"], JS_FAMILY)
register_comment_style(["go"], GO_STYLE)
register_comment_style(["kt", "swift", "dart"], TRIPLE_QUOTE_C)
register_comment_style(["rs"], RUST_STYLE)
register_comment_style(["scss", "less"], SCSS_STYLE)
register_comment_style(["css"], CSS_STYLE)
register_comment_style(["html", "svelte", "vue", "xml", "md"], MARKUP_STYLE)
register_comment_style(["py"], PYTHON_STYLE)
register_comment_style(["rb", "sh", "bash", "zsh", "pl", "yaml", "yml", "toml", "r"], HASH_STYLE)
register_comment_style(["ps1"], POWERSHELL_STYLE)
register_comment_style(["sql"], SQL_STYLE)
register_comment_style(["lua"], LUA_STYLE)
