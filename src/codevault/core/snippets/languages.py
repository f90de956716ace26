"""
Language registry: language name -> export extension and highlighter lexer.

Lookups are case-insensitive and total: unknown languages fall back to a
plain-text extension and lexer.
"""

from typing import NamedTuple

FALLBACK_EXTENSION = "txt"
FALLBACK_LEXER = "text"


class Language(NamedTuple):
    """One supported language."""

    name: str
    extension: str
    lexer: str


SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    Language("AppleScript", "applescript", "applescript"),
    Language("ASP", "asp", "aspx-vb"),
    Language("Batch File", "bat", "batch"),
    Language("BibTeX", "bib", "bibtex"),
    Language("Bourne Again Shell (bash)", "sh", "bash"),
    Language("C", "c", "c"),
    Language("C#", "cs", "csharp"),
    Language("C++", "cpp", "cpp"),
    Language("Cargo Build Results", "log", "text"),
    Language("Clojure", "clj", "clojure"),
    Language("commands-builtin-shell-bash", "sh", "bash"),
    Language("CSS", "css", "css"),
    Language("D", "d", "d"),
    Language("Diff", "diff", "diff"),
    Language("Erlang", "erl", "erlang"),
    Language("Go", "go", "go"),
    Language("Graphviz (DOT)", "dot", "dot"),
    Language("Groovy", "groovy", "groovy"),
    Language("Haml", "haml", "haml"),
    Language("Haskell", "hs", "haskell"),
    Language("HTML", "html", "html"),
    Language("Java", "java", "java"),
    Language("Java Properties", "properties", "properties"),
    Language("JavaScript", "js", "javascript"),
    Language("JSON", "json", "json"),
    Language("LaTeX", "tex", "latex"),
    Language("LaTeX Log", "log", "text"),
    Language("Lisp", "lisp", "common-lisp"),
    Language("Lua", "lua", "lua"),
    Language("Make Output", "mak", "text"),
    Language("Makefile", "mak", "make"),
    Language("Markdown", "md", "markdown"),
    Language("MATLAB", "m", "matlab"),
    Language("MultiMarkdown", "mmd", "markdown"),
    Language("NAnt Build File", "build", "xml"),
    Language("Objective-C", "m", "objective-c"),
    Language("Objective-C++", "mm", "objective-c++"),
    Language("OCaml", "ml", "ocaml"),
    Language("OCamllex", "mll", "ocaml"),
    Language("OCamlyacc", "mly", "ocaml"),
    Language("Pascal", "pas", "pascal"),
    Language("Perl", "pl", "perl"),
    Language("PHP", "php", "php"),
    Language("Python", "py", "python"),
    Language("R", "R", "r"),
    Language("R Console", "Rout", "rconsole"),
    Language("Rd (R Documentation)", "Rd", "rd"),
    Language("Regular Expression", "regex", "text"),
    Language("Regular Expressions (Javascript)", "js", "javascript"),
    Language("Regular Expressions (Python)", "py", "python"),
    Language("reStructuredText", "rst", "rst"),
    Language("Ruby", "rb", "ruby"),
    Language("Ruby on Rails", "rb", "ruby"),
    Language("Rust", "rs", "rust"),
    Language("Scala", "scala", "scala"),
    Language("Shell-Unix-Generic", "sh", "bash"),
    Language("SQL", "sql", "sql"),
    Language("Tcl", "tcl", "tcl"),
    Language("TeX", "tex", "tex"),
    Language("Textile", "textile", "text"),
    Language("XML", "xml", "xml"),
    Language("YAML", "yaml", "yaml"),
)

# Keyed by lowercased name
_BY_NAME: dict[str, Language] = {lang.name.lower(): lang for lang in SUPPORTED_LANGUAGES}


def lookup(language: str | None) -> Language | None:
    """Find a supported language by name, ignoring case and surrounding whitespace."""
    if not language:
        return None
    return _BY_NAME.get(language.strip().lower())


def extension_for(language: str | None) -> str:
    """
    File extension (without the dot) for exporting code in this language.

    Args:
        language: Language name as stored on the snippet

    Returns:
        The registered extension, or FALLBACK_EXTENSION for unknown languages

    Example:
        >>> extension_for("python")
        'py'
        >>> extension_for("Klingon")
        'txt'
    """
    found = lookup(language)
    return found.extension if found else FALLBACK_EXTENSION


def lexer_for(language: str | None) -> str:
    """Highlighter lexer alias for this language (plain text when unknown)."""
    found = lookup(language)
    return found.lexer if found else FALLBACK_LEXER


def supported_languages() -> list[Language]:
    """All supported languages, in table order."""
    return list(SUPPORTED_LANGUAGES)
