"""Rust item paths such as ``serde_json::value::Value``."""

from __future__ import annotations

from dataclasses import dataclass

STD_CRATES = frozenset({"alloc", "core", "proc_macro", "std", "test"})

_TYPE_KINDS = ("struct", "trait", "enum", "type", "derive", "union")
_VALUE_KINDS = ("fn", "macro", "constant", "attr")
_STD_KINDS = ("keyword", "primitive")


class DocPathError(ValueError):
    """Base error for unparseable item paths."""


class EmptyPathError(DocPathError):
    def __init__(self) -> None:
        super().__init__("item path is empty")


class InvalidPathCharError(DocPathError):
    def __init__(self, position: int) -> None:
        super().__init__(f"invalid character at position {position}")
        self.position = position


def _is_allowed(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in "_-"


@dataclass(frozen=True)
class DocPath:
    crate_name: str
    modules: tuple[str, ...]
    item_name: str

    @classmethod
    def parse(cls, text: str) -> DocPath:
        """Parse ``crate::module::Item``.

        Raises:
            EmptyPathError: *text* is blank.
            InvalidPathCharError: a segment is empty or holds a character
                other than ASCII alphanumerics, ``_`` or ``-``.
        """
        text = text.strip()
        if not text:
            raise EmptyPathError()

        segments: list[str] = []
        offset = 0
        for segment in text.split("::"):
            if not segment:
                raise InvalidPathCharError(offset)
            for i, c in enumerate(segment):
                if not _is_allowed(c):
                    raise InvalidPathCharError(offset + i)
            segments.append(segment)
            offset += len(segment) + 2

        crate_name = segments[0]
        rest = [segment.replace("-", "_") for segment in segments]
        item_name = rest.pop()
        return cls(crate_name=crate_name, modules=tuple(rest), item_name=item_name)

    @property
    def display(self) -> str:
        return "::".join((*self.modules, self.item_name))

    @property
    def is_std(self) -> bool:
        return self.crate_name in STD_CRATES

    def base_url(self, docs_base_url: str, std_base_url: str, version: str = "latest") -> str:
        if self.is_std:
            url = std_base_url.rstrip("/") + "/"
        else:
            url = f"{docs_base_url.rstrip('/')}/{self.crate_name}/{version}/"
        for module in self.modules:
            url += f"{module}/"
        return url

    def docs_urls(self, docs_base_url: str, std_base_url: str, version: str = "latest") -> list[str]:
        """Candidate page URLs for this item, most likely first."""
        base = self.base_url(docs_base_url, std_base_url, version)
        module_url = f"{base}{self.item_name}/index.html"
        value_urls = [f"{base}{kind}.{self.item_name}.html" for kind in _VALUE_KINDS]
        type_urls = [f"{base}{kind}.{self.item_name}.html" for kind in _TYPE_KINDS]
        std_urls = [f"{base}{kind}.{self.item_name}.html" for kind in _STD_KINDS] if self.is_std else []

        if self.item_name[:1].islower():
            return [module_url, *value_urls, *std_urls, *type_urls]
        return [*type_urls, module_url, *value_urls, *std_urls]
