"""CatalogService: the only component that touches both index and documents.

INVARIANT: index entries and item documents are in 1:1
correspondence after every successful create, delete, and move.

Compound operations have no transaction log. When a later step fails
after an earlier one succeeded the result is ``PARTIAL_FAILURE`` and the
catalog is left for the operator to re-run or :meth:`reconcile`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from vidctl.domain.completion import with_computed_stages
from vidctl.domain.item import IndexEntry, Item, apply_changes, parse_publish_date
from vidctl.domain.names import category_display_name
from vidctl.domain.phases import Phase, compute_phase
from vidctl.domain.stages import STAGE_ORDER
from vidctl.infrastructure.errors import CorruptError, StorageError
from vidctl.infrastructure.filesystem import (
    list_subdirectories,
    move_file,
    remove_file,
    write_text_if_absent,
)
from vidctl.infrastructure.templates import render_starter_script
from vidctl.services._helpers import blank, failure, relative_to, storage_failure
from vidctl.services.base import BaseService
from vidctl.services.result import ServiceResult
from vidctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class CatalogService(BaseService):
    """Create, read, update, delete, move, and list production items."""

    # ------------------------------------------------------------------
    # Single-item operations
    # ------------------------------------------------------------------

    @traced
    def create(self, name: str, category: str) -> ServiceResult:
        """Create an item with a starter script and register it in the index.

        Idempotent: an existing document is never overwritten and an
        existing index entry is never duplicated.
        """
        op = "create"
        warnings: list[str] = []
        if blank(name, category):
            return failure(op, "INVALID_ARGUMENT", "Name and category are required")

        docs = self._workspace.documents
        try:
            path = docs.resolve_path(name, category)
            script = self._workspace.script_path(name, category)
        except ValueError as exc:
            return failure(op, "INVALID_ARGUMENT", str(exc))

        index = self._workspace.index
        try:
            known = index.load_or_empty()
        except StorageError:
            # A broken index is reported when the new entry is saved below.
            known = []
        clash = self._claimant(path, name, category, known)
        if clash is not None:
            return failure(
                op,
                "INVALID_ARGUMENT",
                f"{category}/{name} collides with existing item {clash} at {self._rel(path)}",
                path=str(path),
            )

        created = False
        try:
            starter = render_starter_script(name, category, workspace_root=self._workspace.root)
            write_text_if_absent(script, starter)
            if docs.exists(path):
                warnings.append(f"Item already exists at {self._rel(path)}; left unchanged")
            else:
                docs.write(Item(name=name, category=category), path)
                created = True
        except StorageError as exc:
            return storage_failure(op, exc)

        try:
            entries = index.load_or_empty()
            key = IndexEntry(name=name, category=category)
            if key not in entries:
                entries.append(key)
                index.save(entries)
        except StorageError as exc:
            logger.warning("Index update failed after writing %s", path)
            return failure(
                op,
                "PARTIAL_FAILURE",
                f"Document written to {path} but index update failed: {exc}",
                path=str(path),
                index_path=str(exc.path),
            )

        if created:
            self._announce(
                "post_create", warnings, name=name, category=category, path=str(path)
            )
        logger.info("Created %s/%s", category, name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": name,
                "category": category,
                "path": self._rel(path),
                "script": self._rel(script),
                "created": created,
                "phase": Phase.IDEAS,
            },
            warnings=warnings,
        )

    @traced
    def get(self, name: str, category: str) -> ServiceResult:
        """Read an item directly from its document (the index is not consulted)."""
        op = "get"
        if blank(name, category):
            return failure(op, "INVALID_ARGUMENT", "Name and category are required")
        docs = self._workspace.documents
        try:
            path = docs.resolve_path(name, category)
        except ValueError as exc:
            return failure(op, "INVALID_ARGUMENT", str(exc))
        try:
            item = docs.read(path).model_copy(update={"name": name, "category": category})
        except StorageError as exc:
            return storage_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"item": item, "phase": compute_phase(item), "path": self._rel(path)},
        )

    @traced
    def update(self, item: Item) -> ServiceResult:
        """Overwrite the item's document. Identity never changes, so the index is untouched."""
        op = "update"
        if not item.path:
            return failure(
                op,
                "INVALID_ARGUMENT",
                f"Item {item.category}/{item.name} has no resolved storage path",
            )
        path = Path(item.path)
        try:
            self._workspace.documents.write(item, path)
        except StorageError as exc:
            return storage_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"item": item, "phase": compute_phase(item), "path": self._rel(path)},
        )

    @traced
    def set_fields(self, name: str, category: str, changes: dict[str, str]) -> ServiceResult:
        """Apply raw ``key=value`` edits to an item and save it via :meth:`update`."""
        op = "update"
        if not changes:
            return failure(op, "INVALID_ARGUMENT", "No changes specified")
        got = self.get(name, category)
        if not got.ok:
            return got.as_op(op)
        try:
            item = apply_changes(got.data["item"], changes)
        except ValueError as exc:
            return failure(op, "INVALID_ARGUMENT", str(exc), path=got.data["path"])
        result = self.update(item)
        if result.ok:
            logger.info("Updated %s/%s: %s", category, name, ", ".join(sorted(changes)))
        return result

    @traced
    def delete(self, name: str, category: str) -> ServiceResult:
        """Remove the document, the script, and the index entry.

        Both removals are attempted even if one fails. Real I/O errors are
        aggregated into one ``PARTIAL_FAILURE`` and the index is then left
        unchanged. Deleting an item that does not exist succeeds.
        """
        op = "delete"
        warnings: list[str] = []
        if blank(name, category):
            return failure(op, "INVALID_ARGUMENT", "Name and category are required")
        try:
            targets = [
                self._workspace.documents.resolve_path(name, category),
                self._workspace.script_path(name, category),
            ]
        except ValueError as exc:
            return failure(op, "INVALID_ARGUMENT", str(exc))

        removed: list[str] = []
        errors: list[StorageError] = []
        for path in targets:
            try:
                if remove_file(path):
                    removed.append(self._rel(path))
            except StorageError as exc:
                errors.append(exc)

        if errors:
            return failure(
                op,
                "PARTIAL_FAILURE",
                "Errors during file deletion: " + "; ".join(str(e) for e in errors),
                paths=[str(e.path) for e in errors],
                removed=removed,
            )

        index = self._workspace.index
        try:
            entries = index.load_or_empty()
            remaining = [e for e in entries if not (e.name == name and e.category == category)]
            if len(remaining) != len(entries):
                index.save(remaining)
        except StorageError as exc:
            return failure(
                op,
                "PARTIAL_FAILURE",
                f"Files removed but index update failed: {exc}",
                path=str(exc.path),
                removed=removed,
            )

        if removed:
            self._announce("post_delete", warnings, name=name, category=category)
        logger.info("Deleted %s/%s", category, name)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "category": category, "removed": removed},
            warnings=warnings,
        )

    @traced
    def move(self, name: str, category: str, target_category: str) -> ServiceResult:
        """Relocate the document and script to *target_category* and update the index.

        If the script cannot be moved after the document was, the document
        move is rolled back (best-effort) before the error is returned.
        """
        op = "move"
        warnings: list[str] = []
        if blank(name, category, target_category):
            return failure(
                op, "INVALID_ARGUMENT", "Name, category and target category are required"
            )

        docs = self._workspace.documents
        try:
            doc_src = docs.resolve_path(name, category)
            doc_dst = docs.resolve_path(name, target_category)
            script_src = self._workspace.script_path(name, category)
            script_dst = self._workspace.script_path(name, target_category)
        except ValueError as exc:
            return failure(op, "INVALID_ARGUMENT", str(exc))

        index = self._workspace.index
        try:
            entries = index.load_or_empty()
        except StorageError as exc:
            return storage_failure(op, exc)

        if not docs.exists(doc_src):
            return failure(op, "NOT_FOUND", f"No item at {doc_src}", path=str(doc_src))

        if doc_src != doc_dst:
            if docs.exists(doc_dst):
                return failure(
                    op,
                    "INVALID_ARGUMENT",
                    f"An item already exists at {doc_dst}",
                    path=str(doc_dst),
                )
            clash = self._claimant(doc_dst, name, target_category, entries)
            if clash is not None:
                return failure(
                    op,
                    "INVALID_ARGUMENT",
                    f"{target_category}/{name} collides with existing item {clash}",
                    path=str(doc_dst),
                )
            if script_src.exists() and script_dst.exists():
                return failure(
                    op,
                    "INVALID_ARGUMENT",
                    f"A script already exists at {script_dst}",
                    path=str(script_dst),
                )
            try:
                move_file(doc_src, doc_dst)
            except StorageError as exc:
                return storage_failure(op, exc)

            if script_src.exists():
                try:
                    move_file(script_src, script_dst)
                except StorageError as exc:
                    self._rollback_move(doc_dst, doc_src)
                    return storage_failure(op, exc)

        try:
            for i, entry in enumerate(entries):
                if entry.name == name and entry.category == category:
                    entries[i] = IndexEntry(name=name, category=target_category)
                    break
            else:
                warnings.append(
                    f"{category}/{name} was not indexed; added under {target_category}"
                )
                entries.append(IndexEntry(name=name, category=target_category))
            index.save(entries)
        except StorageError as exc:
            return failure(
                op,
                "PARTIAL_FAILURE",
                f"Files moved to {doc_dst} but index update failed: {exc}",
                path=str(doc_dst),
                index_path=str(exc.path),
            )

        self._announce(
            "post_move",
            warnings,
            name=name,
            category=category,
            target_category=target_category,
            path=str(doc_dst),
        )
        logger.info("Moved %s/%s to %s", category, name, target_category)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": name,
                "category": target_category,
                "previous_category": category,
                "path": self._rel(doc_dst),
            },
            warnings=warnings,
        )

    @traced
    def refresh(self, name: str, category: str) -> ServiceResult:
        """Recompute every stage counter from the item's fields and save it."""
        op = "refresh"
        got = self.get(name, category)
        if not got.ok:
            return got.as_op(op)
        item = with_computed_stages(got.data["item"])
        saved = self.update(item)
        if not saved.ok:
            return saved.as_op(op)
        stages = {
            stage.value: {
                "completed": item.stage(stage).completed,
                "total": item.stage(stage).total,
                "done": item.stage(stage).is_done,
            }
            for stage in STAGE_ORDER
        }
        return ServiceResult(
            ok=True,
            op=op,
            data={"item": item, "phase": compute_phase(item), "stages": stages},
        )

    # ------------------------------------------------------------------
    # Catalog-wide queries
    # ------------------------------------------------------------------

    @traced
    def list_by_phase(self, phase: Phase | str) -> ServiceResult:
        """Items currently in *phase*, oldest publish date first.

        Strict: any unreadable document aborts the whole call.
        """
        op = "list_by_phase"
        try:
            wanted = Phase(phase)
        except ValueError:
            choices = ", ".join(p.value for p in Phase)
            return failure(op, "INVALID_ARGUMENT", f"Unknown phase {phase!r}; expected {choices}")

        try:
            entries = self._workspace.index.load_or_empty()
            with trace_span("read_documents") as span:
                items = self._map_entries(self._read, entries)
                if span is not None:
                    span.annotate("documents", len(items))
        except StorageError as exc:
            return storage_failure(op, exc)

        fmt = self._workspace.catalog_config.date_format
        selected = [item for item in items if compute_phase(item) == wanted]
        selected.sort(key=lambda item: parse_publish_date(item.date, fmt))
        return ServiceResult(
            ok=True,
            op=op,
            data={"phase": wanted, "count": len(selected), "items": selected},
        )

    @traced
    def counts_by_phase(self) -> ServiceResult:
        """Number of items per phase.

        Best-effort: unreadable documents are skipped and reported as warnings.
        """
        op = "counts_by_phase"
        warnings: list[str] = []
        try:
            entries = self._workspace.index.load_or_empty()
        except StorageError as exc:
            return storage_failure(op, exc)

        counts: dict[str, int] = {phase.value: 0 for phase in Phase}
        skipped = 0
        for outcome in self._map_entries(self._read_or_error, entries):
            if isinstance(outcome, StorageError):
                skipped += 1
                warnings.append(f"Skipped {outcome.path}: {outcome}")
                continue
            counts[compute_phase(outcome).value] += 1

        return ServiceResult(
            ok=True,
            op=op,
            data={"counts": counts, "total": sum(counts.values()), "skipped": skipped},
            warnings=warnings,
        )

    @traced
    def list_categories(self) -> ServiceResult:
        """Categories found as subdirectories of the content root, sorted by display name."""
        op = "list_categories"
        try:
            dirs = list_subdirectories(self._workspace.documents.root)
        except StorageError as exc:
            return storage_failure(op, exc)
        categories = sorted(
            ({"name": category_display_name(d.name), "path": self._rel(d)} for d in dirs),
            key=lambda c: c["name"],
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"categories": categories, "count": len(categories)},
        )

    @traced
    def reconcile(self) -> ServiceResult:
        """Report index entries without documents and documents without entries.

        Entries listed twice and distinct entries that resolve to the same
        document are reported as well.

        Read-only: nothing is repaired.
        """
        op = "reconcile"
        docs = self._workspace.documents
        try:
            entries = self._workspace.index.load_or_empty()
            on_disk = {p.resolve() for p in docs.find_all()}
        except StorageError as exc:
            return storage_failure(op, exc)

        missing: list[dict[str, str]] = []
        duplicates: list[dict[str, str]] = []
        colliding: list[dict[str, str]] = []
        owners: dict[Path, IndexEntry] = {}
        seen: set[IndexEntry] = set()
        for entry in entries:
            if entry in seen:
                duplicates.append(entry.model_dump())
                continue
            seen.add(entry)
            try:
                path = docs.resolve_path(entry.name, entry.category).resolve()
            except ValueError:
                missing.append({**entry.model_dump(), "path": ""})
                continue
            owner = owners.setdefault(path, entry)
            if owner != entry:
                colliding.append(
                    {
                        **entry.model_dump(),
                        "path": self._rel(path),
                        "collides_with": f"{owner.category}/{owner.name}",
                    }
                )
                continue
            if path not in on_disk:
                missing.append({**entry.model_dump(), "path": self._rel(path)})

        unindexed = sorted(self._rel(p) for p in on_disk - set(owners))
        consistent = not (missing or unindexed or duplicates or colliding)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "consistent": consistent,
                "missing_documents": missing,
                "unindexed_documents": unindexed,
                "duplicate_entries": duplicates,
                "colliding_entries": colliding,
            },
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _claimant(
        self, path: Path, name: str, category: str, entries: list[IndexEntry]
    ) -> str | None:
        """Another item already stored at *path*, as ``category/name``.

        Distinct names can sanitize to the same file (``Foo`` and ``foo``,
        or categories ``Cloud`` and ``cloud``). Index entries are checked
        first, then the name recorded in an existing document.
        """
        docs = self._workspace.documents
        for entry in entries:
            if entry.name == name and entry.category == category:
                continue
            try:
                if docs.resolve_path(entry.name, entry.category) == path:
                    return f"{entry.category}/{entry.name}"
            except ValueError:
                continue
        if docs.exists(path):
            try:
                stored = docs.read(path)
            except StorageError:
                return None
            if stored.name and stored.name != name:
                return f"{stored.category}/{stored.name}"
        return None

    def _read(self, entry: IndexEntry) -> Item:
        """Read the document for an index entry; identity comes from the entry."""
        docs = self._workspace.documents
        try:
            path = docs.resolve_path(entry.name, entry.category)
        except ValueError as exc:
            msg = f"Invalid index entry {entry.category}/{entry.name}: {exc}"
            raise CorruptError(msg, path=self._workspace.index.path) from exc
        item = docs.read(path)
        return item.model_copy(update={"name": entry.name, "category": entry.category})

    def _read_or_error(self, entry: IndexEntry) -> Item | StorageError:
        try:
            return self._read(entry)
        except StorageError as exc:
            return exc

    def _map_entries(
        self,
        func: Callable[[IndexEntry], _T],
        entries: Iterable[IndexEntry],
    ) -> list[_T]:
        """Apply *func* to every entry, in index order, using a small thread pool."""
        entries = list(entries)
        workers = min(self._workspace.catalog_config.read_workers, len(entries))
        if workers <= 1:
            return [func(entry) for entry in entries]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(func, entries))

    @staticmethod
    def _rollback_move(moved_to: Path, original: Path) -> None:
        try:
            move_file(moved_to, original)
        except StorageError:
            logger.warning("Failed to roll back move of %s to %s", moved_to, original)

    def _rel(self, path: Path) -> str:
        return relative_to(path, self._workspace.root)
