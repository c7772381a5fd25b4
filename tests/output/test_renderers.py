"""Tests for operation-specific Rich renderers."""

from vidctl.domain.item import Item, Sponsorship
from vidctl.domain.phases import Phase
from vidctl.domain.stages import StageState
from vidctl.output.renderers import render_quiet, render_result
from vidctl.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("get", "NOT_FOUND", "No item at /w/v.yaml"))
        assert "ERROR" in output
        assert "NOT_FOUND" in output
        assert "No item at /w/v.yaml" in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_err("get", "NOT_FOUND", "Bad", path="/w/v.yaml"), verbose=True)
        assert "detail" in output
        assert "/w/v.yaml" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Mutation renderer ────────────────────────────────────────────────


class TestMutationRenderer:
    def test_create(self) -> None:
        output = render_result(
            _ok(
                "create",
                name="My Video",
                category="Development",
                path="manuscript/development/my-video.yaml",
                script="manuscript/development/my-video.md",
                created=True,
                phase=Phase.IDEAS,
            )
        )
        assert "OK" in output
        assert "create" in output
        assert "manuscript/development/my-video.yaml" in output
        assert "Ideas" in output

    def test_move(self) -> None:
        output = render_result(
            _ok("move", name="v", category="tools", previous_category="dev", path="p")
        )
        assert "previous_category: dev" in output
        assert "category: tools" in output


# ── Item renderers ───────────────────────────────────────────────────


class TestItemRenderer:
    def test_panel(self) -> None:
        item = Item(
            name="v",
            category="dev",
            title="Argo CD",
            initiation=StageState(completed=8, total=8),
            material=StageState(completed=3, total=11),
            sponsorship=Sponsorship(blocked="unpaid"),
        )
        output = render_result(
            _ok("get", item=item, phase=Phase.SPONSORED_BLOCKED, path="manuscript/dev/v.yaml")
        )
        assert "dev / v" in output
        assert "Initiation" in output
        assert "3/11" in output
        assert "Sponsored Blocked" in output
        assert "Argo CD" in output
        assert "unpaid" in output

    def test_table(self) -> None:
        items = [
            Item(name="first", category="dev", date="2026-01-01T10:00"),
            Item(name="second", category="ops"),
        ]
        output = render_result(_ok("list_by_phase", phase=Phase.STARTED, count=2, items=items))
        assert "first" in output
        assert "2026-01-01T10:00" in output
        assert "2 items in" in output
        assert "Started" in output
        assert output.index("first") < output.index("second")


# ── Catalog renderers ────────────────────────────────────────────────


class TestCatalogRenderers:
    def test_counts(self) -> None:
        counts = {p.value: 0 for p in Phase}
        counts["ideas"] = 4
        output = render_result(_ok("counts_by_phase", counts=counts, total=4, skipped=1))
        assert "Material Done" in output
        assert "4 items" in output
        assert "1 unreadable" in output

    def test_categories(self) -> None:
        output = render_result(
            _ok(
                "list_categories",
                categories=[{"name": "Development", "path": "manuscript/development"}],
                count=1,
            )
        )
        assert "Development" in output
        assert "1 categories" in output

    def test_reconcile_consistent(self) -> None:
        output = render_result(
            _ok(
                "reconcile",
                consistent=True,
                missing_documents=[],
                unindexed_documents=[],
                duplicate_entries=[],
            )
        )
        assert "consistent" in output

    def test_reconcile_discrepancies(self) -> None:
        output = render_result(
            _ok(
                "reconcile",
                consistent=False,
                missing_documents=[{"name": "gone", "category": "c", "path": "m/c/gone.yaml"}],
                unindexed_documents=["m/c/stray.yaml"],
                duplicate_entries=[{"name": "dup", "category": "c"}],
                colliding_entries=[
                    {"name": "foo", "category": "c", "path": "m/c/foo.yaml", "collides_with": "c/Foo"}
                ],
            )
        )
        assert "missing document" in output
        assert "m/c/stray.yaml" in output
        assert "c/dup" in output
        assert "c/foo with c/Foo" in output

    def test_refresh(self) -> None:
        output = render_result(
            _ok(
                "refresh",
                phase=Phase.IDEAS,
                stages={"publish": {"completed": 1, "total": 3, "done": False}},
            )
        )
        assert "publish: 1/3" in output


class TestVerboseMeta:
    def test_telemetry_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="phases",
            data={"counts": {}, "total": 0, "skipped": 0},
            meta={
                "telemetry": {
                    "name": "CatalogService.counts_by_phase",
                    "duration_ms": 1.5,
                    "children": [{"name": "read_documents", "duration_ms": 1.0}],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "CatalogService.counts_by_phase" in output
        assert "read_documents" in output


class TestQuiet:
    def test_ok(self) -> None:
        assert render_quiet(_ok("create", name="v")) == "OK: create"

    def test_items(self) -> None:
        items = [Item(name="a", category="x"), Item(name="b", category="y")]
        assert render_quiet(_ok("list_by_phase", items=items)) == "x/a\ny/b"

    def test_error(self) -> None:
        output = render_quiet(_err("get", "NOT_FOUND", "gone"))
        assert output.startswith("ERROR: get")
        assert "gone" in output
