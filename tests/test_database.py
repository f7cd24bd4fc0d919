"""Tests for the database client and the fluent query builder."""

from orbitnest import ColumnField, Err, Ok, QueryResult, RlsPolicy, SortOrder, TableQueryBuilder

from conftest import project_path

DB = project_path("database")


# =============================================================================
# Query builder
# =============================================================================


async def test_repeated_limit_overwrites(client, service):
    service.reply("GET", f"{DB}/tables/todos/data", json={"rows": [], "total": 0})

    result = await client.db.from_("todos").limit(10).limit(5).select()

    assert isinstance(result, Ok)
    assert service.call_count == 1
    assert service.last.url.params.get_list("limit") == ["5"]


async def test_chain_returns_same_builder(client):
    builder = client.db.from_("todos")

    assert builder.page(2) is builder
    assert builder.limit(20) is builder
    assert builder.order_by("created_at") is builder
    assert isinstance(builder, TableQueryBuilder)


async def test_select_sends_accumulated_state(client, service):
    rows = {"rows": [{"id": 1}], "total": 41}
    service.reply("GET", f"{DB}/tables/todos/data", json=rows)

    result = await client.db.table("todos").page(3).limit(20).order_by("created_at", SortOrder.DESC).select()

    assert result.data == rows
    assert dict(service.last.url.params) == {
        "page": "3",
        "limit": "20",
        "sortBy": "created_at",
        "sortOrder": "DESC",
    }


async def test_order_by_defaults_to_ascending(client, service):
    service.reply("GET", f"{DB}/tables/todos/data", json={"rows": [], "total": 0})

    await client.db.from_("todos").order_by("name").order_by("id").select()

    assert dict(service.last.url.params) == {"sortBy": "id", "sortOrder": "ASC"}


async def test_select_without_state_sends_no_params(client, service):
    service.reply("GET", f"{DB}/tables/todos/data", json={"rows": [], "total": 0})

    await client.db.from_("todos").select()

    assert service.last.url.query == b""


async def test_builder_writes_bypass_state(client, service):
    service.reply("POST", f"{DB}/tables/todos/rows", json={"id": 7, "title": "x"})
    service.reply("PUT", f"{DB}/tables/todos/rows/7", json={"id": 7, "title": "y"})
    service.reply("DELETE", f"{DB}/tables/todos/rows/7", json={"success": True})
    builder = client.db.from_("todos").limit(3)

    inserted = await builder.insert({"title": "x"})
    updated = await builder.update(7, {"title": "y"})
    deleted = await builder.delete(7)

    assert inserted.data["id"] == 7
    assert updated.data["title"] == "y"
    assert deleted.data == {"success": True}
    assert all(request.url.query == b"" for request in service.requests)


# =============================================================================
# SQL
# =============================================================================


async def test_query_reshapes_rows(client, service):
    service.reply(
        "POST",
        f"{DB}/sql",
        json={
            "success": True,
            "data": [{"id": 1}, {"id": 2}],
            "rows_affected": 2,
            "columns": [{"name": "id", "type": "int4"}],
        },
    )

    result = await client.db.query("select id from todos where done = $1", [False])

    assert result.data == QueryResult(
        rows=[{"id": 1}, {"id": 2}],
        row_count=2,
        fields=[ColumnField(name="id", data_type="int4")],
    )
    assert service.last_json() == {"sql": "select id from todos where done = $1", "params": [False]}


async def test_query_defaults_for_missing_fields(client, service):
    service.reply("POST", f"{DB}/sql", json={"success": True})

    result = await client.db.query("delete from todos")

    assert result.data == QueryResult(rows=[], row_count=0, fields=None)
    assert service.last_json() == {"sql": "delete from todos"}


async def test_query_error_passes_through(client, service):
    service.reply("POST", f"{DB}/sql", status=400, json={"message": "syntax error", "code": "42601"})

    result = await client.db.query("selec 1")

    assert isinstance(result, Err)
    assert result.error.message == "syntax error"
    assert result.error.code == "42601"


async def test_table_metadata_and_list(client, service):
    service.reply("GET", f"{DB}/tables/list", json=["todos", "users"])
    service.reply("GET", f"{DB}/tables", json={"name": "todos", "schema": "public", "columns": []})

    tables = await client.db.list_tables()
    meta = await client.db.get_table_metadata("todos")

    assert tables.data == ["todos", "users"]
    assert meta.data["name"] == "todos"
    assert dict(service.last.url.params) == {"table": "todos"}


# =============================================================================
# Bulk
# =============================================================================


async def test_bulk_operations_send_one_request(client, service):
    path = f"{DB}/tables/todos/rows/bulk"
    service.reply("POST", path, json=[{"id": 1}, {"id": 2}])
    service.reply("PUT", path, json=[{"id": 1}])
    service.reply("DELETE", path, json={"deleted": 2})

    await client.db.bulk_insert("todos", [{"title": "a"}, {"title": "b"}])
    assert service.last_json() == [{"title": "a"}, {"title": "b"}]

    await client.db.bulk_update("todos", [{"where": {"id": 1}, "data": {"done": True}}])
    assert service.last_json() == [{"where": {"id": 1}, "data": {"done": True}}]

    deleted = await client.db.bulk_delete("todos", [{"id": 1}, {"id": 2}])
    assert deleted.data == {"deleted": 2}
    assert service.call_count == 3


# =============================================================================
# Row level security
# =============================================================================


async def test_rls_management(client, service):
    base = f"{DB}/tables/todos"
    service.reply("POST", f"{base}/rls/enable", json={"success": True})
    service.reply("POST", f"{base}/rls/disable", json={"success": True})
    service.reply("POST", f"{base}/policies", json={"success": True})
    service.reply("GET", f"{base}/policies", json=[{"name": "own_rows"}])
    service.reply("DELETE", f"{base}/policies/own_rows", json={"success": True})

    assert (await client.db.enable_rls("todos")).data == {"success": True}
    assert (await client.db.disable_rls("todos")).data == {"success": True}

    policy = RlsPolicy(name="own_rows", command="SELECT", definition="user_id = auth.uid()")
    await client.db.create_policy("todos", policy)
    assert service.last_json() == {"name": "own_rows", "command": "SELECT", "definition": "user_id = auth.uid()"}

    assert (await client.db.list_policies("todos")).data == [{"name": "own_rows"}]
    assert (await client.db.delete_policy("todos", "own_rows")).data == {"success": True}
