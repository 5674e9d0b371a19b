"""Import organizing pass applied to rendered Go source."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple, Union

from tree_sitter import Node

from ..config import ImportsConfig
from ..logging import get_logger
from ..printer import render
from ..syntax.parser import GoParser, SourceFile
from ..syntax.tokens import child_of_type, walk

_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_IDENTIFIER_PREFIX = re.compile(r"^[A-Za-z0-9_]*")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Names that keep an import alive regardless of references.
_ALWAYS_KEPT_NAMES = {"_", "."}

_STDLIB_GROUP = 0
_THIRD_PARTY_GROUP = 1
_LOCAL_GROUP = 2


class OrganizeError(RuntimeError):
    """Raised when the import organizing pass cannot complete."""


@dataclass(frozen=True)
class ImportSpec:
    """One entry of an import declaration."""

    literal: str
    name: Optional[str] = None

    @property
    def path(self) -> str:
        return self.literal[1:-1]

    def render(self) -> str:
        return f"{self.name} {self.literal}" if self.name else self.literal


Runner = Callable[[Sequence[str], bytes], bytes]


class ImportOrganizer:
    """Sorts, groups, deduplicates and prunes imports of rendered source."""

    def __init__(
        self,
        config: ImportsConfig | None = None,
        parser: GoParser | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.config = config or ImportsConfig()
        self._parser = parser or GoParser()
        self._runner = runner or self._default_runner
        self.logger = get_logger("organizer")

    def organize(self, source: bytes, path: Union[str, Path] = "<input>") -> bytes:
        if self.config.tool == "goimports":
            return self._run_goimports(source, Path(path))
        return self._organize_builtin(source, str(path))

    # ------------------------------------------------------------------
    # Built-in organizer

    def _organize_builtin(self, source: bytes, path: str) -> bytes:
        source_file = self._parser.parse(source, path)
        referenced = referenced_packages(source_file)
        edits: List[Tuple[int, int, bytes]] = []

        for declaration in source_file.root.children:
            if declaration.type != "import_declaration":
                continue
            group = child_of_type(declaration, "import_spec_list")
            if group is None:
                single = child_of_type(declaration, "import_spec")
                if single is None or not self.config.remove_unused:
                    continue
                if not self._is_used(_read_spec(source_file, single), referenced):
                    self.logger.debug("Removing unused import in %s", path)
                    edits.append(_removal(source, declaration))
                continue

            if any(node.type == "comment" for node in walk(group)):
                self.logger.debug("Leaving commented import group untouched in %s", path)
                continue

            specs = [_read_spec(source_file, node) for node in group.children if node.type == "import_spec"]
            kept = self._select(specs, referenced)
            if not kept:
                edits.append(_removal(source, declaration))
                continue
            rendered = self._render_group(kept)
            if rendered != source[declaration.start_byte : declaration.end_byte]:
                edits.append((declaration.start_byte, declaration.end_byte, rendered))

        if not edits:
            return source

        updated = source
        for start, end, replacement in sorted(edits, reverse=True):
            updated = updated[:start] + replacement + updated[end:]
        return render(self._parser.parse(updated, path))

    def _select(self, specs: Iterable[ImportSpec], referenced: Set[str]) -> List[ImportSpec]:
        kept: List[ImportSpec] = []
        seen: Set[Tuple[Optional[str], str]] = set()
        for spec in specs:
            key = (spec.name, spec.path)
            if key in seen:
                continue
            seen.add(key)
            if self.config.remove_unused and not self._is_used(spec, referenced):
                self.logger.debug("Dropping unused import %s", spec.render())
                continue
            kept.append(spec)
        return kept

    @staticmethod
    def _is_used(spec: ImportSpec, referenced: Set[str]) -> bool:
        if spec.name in _ALWAYS_KEPT_NAMES or spec.path == "C":
            return True
        if spec.name:
            return spec.name in referenced
        names = candidate_package_names(spec.path)
        # No safe guess without loading the package: keep it.
        return not names or not names.isdisjoint(referenced)

    def _render_group(self, specs: Sequence[ImportSpec]) -> bytes:
        ordered = sorted(specs, key=lambda spec: (self._group_of(spec.path), spec.path, spec.name or ""))
        blocks: List[str] = []
        current_group: Optional[int] = None
        for spec in ordered:
            group = self._group_of(spec.path)
            if group != current_group:
                blocks.append("")
                current_group = group
            blocks[-1] += f"\t{spec.render()}\n"
        return ("import (\n" + "\n".join(blocks) + ")").encode("utf-8")

    def _group_of(self, import_path: str) -> int:
        prefix = self.config.local_prefix
        if prefix and import_path.startswith(prefix):
            return _LOCAL_GROUP
        if "." not in import_path.split("/", 1)[0]:
            return _STDLIB_GROUP
        return _THIRD_PARTY_GROUP

    # ------------------------------------------------------------------
    # External goimports

    def _run_goimports(self, source: bytes, path: Path) -> bytes:
        args = ["goimports", "-srcdir", str(path.parent)]
        if self.config.local_prefix:
            args.extend(["-local", self.config.local_prefix])
        try:
            return self._runner(args, source)
        except FileNotFoundError as exc:
            raise OrganizeError(f"{path}: goimports not found on PATH") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
            raise OrganizeError(f"{path}: goimports failed: {detail or exc}") from exc

    @staticmethod
    def _default_runner(args: Sequence[str], source: bytes) -> bytes:
        completed = subprocess.run(list(args), input=source, check=True, capture_output=True)
        return completed.stdout


def referenced_packages(source_file: SourceFile) -> Set[str]:
    """Return identifiers used as the package part of ``pkg.Name`` references."""
    names: Set[str] = set()
    for node in walk(source_file.root):
        if node.type == "selector_expression":
            operand = node.child_by_field_name("operand")
            if operand is not None and operand.type == "identifier":
                names.add(source_file.text(operand))
        elif node.type == "qualified_type":
            package = node.child_by_field_name("package")
            if package is not None:
                names.add(source_file.text(package))
    return names


def assumed_package_name(import_path: str) -> str:
    """Guess the package name for ``import_path`` the way goimports does."""
    parts = import_path.rstrip("/").split("/")
    base = parts[-1]
    if _MAJOR_VERSION.match(base) and len(parts) > 1:
        base = parts[-2]
    if base.startswith("go-"):
        base = base[len("go-") :]
    match = _IDENTIFIER_PREFIX.match(base)
    return match.group(0) if match else ""


def candidate_package_names(import_path: str) -> Set[str]:
    """Return the names a package at ``import_path`` may be referenced by.

    The declared package name is unknown without loading the package, so
    the raw last element (``v1`` in ``k8s.io/api/core/v1``) counts as well
    as the goimports guess. An empty set means the path's last element is
    not an identifier and no name can be trusted.
    """
    parts = import_path.rstrip("/").split("/")
    last = parts[-1]
    base = parts[-2] if _MAJOR_VERSION.match(last) and len(parts) > 1 else last
    if base.startswith("go-"):
        base = base[len("go-") :]
    if not _IDENTIFIER.match(base):
        return set()
    names = {assumed_package_name(import_path)}
    if _IDENTIFIER.match(last):
        names.add(last)
    return names


def _read_spec(source_file: SourceFile, node: Node) -> ImportSpec:
    name_node = node.child_by_field_name("name")
    path_node = node.child_by_field_name("path")
    literal = source_file.text(path_node) if path_node is not None else '""'
    name = source_file.text(name_node) if name_node is not None else None
    return ImportSpec(literal=literal, name=name)


def _removal(source: bytes, node: Node) -> Tuple[int, int, bytes]:
    end = node.end_byte
    if source[end : end + 1] == b"\n":
        end += 1
    return (node.start_byte, end, b"")


__all__ = [
    "ImportOrganizer",
    "ImportSpec",
    "OrganizeError",
    "assumed_package_name",
    "candidate_package_names",
    "referenced_packages",
]
