"""
Snippetbox — HTML Page Tests
=============================

What:  End-to-end tests for the server-rendered pages.
How:   HTTPX AsyncClient over ASGITransport; most tests use the in-memory
       SQLite store, HTTP-only behaviour uses mock_store.
"""

from datetime import datetime, timezone

import pytest

from snippetbox.exceptions import NotFoundError, StorageError
from snippetbox.routes.pages import parse_snippet_id
from snippetbox.schemas.snippet import SnippetResponse

SNAIL = "O snail\nClimb Mount Fuji,\nBut slowly, slowly!\n\n– Kobayashi Issa"


class TestHomePage:

    @pytest.mark.asyncio
    async def test_home_without_snippets(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert "There's nothing to see here... yet!" in response.text
        assert f"Powered by Snippetbox in {datetime.now(timezone.utc).year}" in response.text

    @pytest.mark.asyncio
    async def test_home_lists_latest_snippets(self, test_client, store):
        snippet_id = await store.insert("0 snail", SNAIL, 7)

        response = await test_client.get("/")

        assert response.status_code == 200
        assert f'href="/snippet/view/{snippet_id}"' in response.text
        assert "0 snail" in response.text
        assert "15 Jan 2026 at 12:00" in response.text

    @pytest.mark.asyncio
    async def test_home_storage_failure_is_generic_500(self, make_client, mock_store):
        mock_store.latest.side_effect = StorageError(operation="latest")
        async with make_client(mock_store) as client:
            response = await client.get("/")
        assert response.status_code == 500
        assert response.text == "Internal Server Error"


class TestSnippetViewPage:

    @pytest.mark.asyncio
    async def test_view_existing_snippet(self, test_client, store):
        snippet_id = await store.insert("0 snail", SNAIL, 7)

        response = await test_client.get(f"/snippet/view/{snippet_id}")

        assert response.status_code == 200
        assert "0 snail" in response.text
        assert "Climb Mount Fuji," in response.text
        assert "Expires: 22 Jan 2026 at 12:00" in response.text

    @pytest.mark.asyncio
    async def test_view_escapes_snippet_content(self, test_client, store):
        snippet_id = await store.insert("<b>bold</b>", "<script>alert(1)</script>", 7)
        response = await test_client.get(f"/snippet/view/{snippet_id}")
        assert "<script>alert(1)</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw_id",
        ["999", "0", "-3", "abc", "1.5", "1_0", "%201", "1%20", "\u0661", "+", "99999999999"],
    )
    async def test_view_missing_or_invalid_id_is_404(self, test_client, raw_id):
        response = await test_client.get(f"/snippet/view/{raw_id}")
        assert response.status_code == 404
        assert response.text == "Not Found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("spelling", ["%201", "1%20", "\u0661", "\uff11"])
    async def test_view_id_must_be_plain_ascii_digits(self, test_client, store, spelling):
        snippet_id = await store.insert("t", "c", 7)
        assert snippet_id == 1

        response = await test_client.get(f"/snippet/view/{spelling}")

        assert response.status_code == 404
        assert (await test_client.get("/snippet/view/1")).status_code == 200

    @pytest.mark.asyncio
    async def test_view_rejects_underscored_id(self, test_client, store):
        for _ in range(10):
            last_id = await store.insert("t", "c", 7)
        assert last_id == 10

        assert (await test_client.get("/snippet/view/1_0")).status_code == 404
        assert (await test_client.get("/snippet/view/10")).status_code == 200

    @pytest.mark.asyncio
    async def test_view_expired_snippet_is_404(self, test_client, store, clock):
        snippet_id = await store.insert("t", "c", 1)
        clock.advance(days=2)
        response = await test_client.get(f"/snippet/view/{snippet_id}")
        assert response.status_code == 404


class TestSnippetCreatePage:

    @pytest.mark.asyncio
    async def test_create_form_renders(self, test_client):
        response = await test_client.get("/snippet/create")
        assert response.status_code == 200
        assert 'action="/snippet/create"' in response.text
        assert 'value="365" checked' in response.text

    @pytest.mark.asyncio
    async def test_valid_submission_redirects_to_new_snippet(self, test_client):
        response = await test_client.post(
            "/snippet/create",
            data={"title": "0 snail", "content": SNAIL, "expires_at": "7"},
        )

        assert response.status_code == 303
        location = response.headers["location"]
        assert location.startswith("/snippet/view/")

        page = await test_client.get(location)
        assert page.status_code == 200
        assert "0 snail" in page.text

    @pytest.mark.asyncio
    async def test_invalid_submission_rerenders_with_all_errors(
        self, make_client, mock_store
    ):
        async with make_client(mock_store) as client:
            response = await client.post(
                "/snippet/create",
                data={"title": "", "content": "", "expires_at": "3"},
            )

        assert response.status_code == 422
        assert response.text.count("This field cannot be blank") == 2
        assert "This field must equal 1, 7 or 365" in response.text
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_submission_keeps_entered_values(self, make_client, mock_store):
        async with make_client(mock_store) as client:
            response = await client.post(
                "/snippet/create",
                data={"title": "Kept title", "content": "", "expires_at": "1"},
            )

        assert response.status_code == 422
        assert 'value="Kept title"' in response.text
        assert 'value="1" checked' in response.text

    @pytest.mark.asyncio
    async def test_missing_fields_are_validation_errors(self, make_client, mock_store):
        async with make_client(mock_store) as client:
            response = await client.post("/snippet/create", data={})
        assert response.status_code == 422
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_failure_on_insert_is_500(self, make_client, mock_store):
        mock_store.insert.side_effect = StorageError(operation="insert")
        async with make_client(mock_store) as client:
            response = await client.post(
                "/snippet/create",
                data={"title": "t", "content": "c", "expires_at": "7"},
            )
        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_submission_passes_cleaned_values_to_store(self, make_client, mock_store):
        mock_store.insert.return_value = 42
        async with make_client(mock_store) as client:
            response = await client.post(
                "/snippet/create",
                data={"title": "t", "content": "c", "expires_at": "365"},
            )
        assert response.headers["location"] == "/snippet/view/42"
        mock_store.insert.assert_awaited_once_with("t", "c", 365)


class TestStaticFiles:

    @pytest.mark.asyncio
    async def test_stylesheet_served(self, test_client):
        response = await test_client.get("/static/css/main.css")
        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]


def make_snippet(**overrides) -> SnippetResponse:
    data = {
        "id": 1,
        "title": "t",
        "content": "c",
        "created_at": datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc),
        "expires_at": datetime(2026, 1, 22, 12, 0, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return SnippetResponse(**data)


@pytest.mark.asyncio
async def test_view_page_uses_store_result(make_client, mock_store):
    mock_store.get.return_value = make_snippet(id=5, title="From mock")
    async with make_client(mock_store) as client:
        response = await client.get("/snippet/view/5")
    assert response.status_code == 200
    assert "From mock" in response.text
    mock_store.get.assert_awaited_once_with(5)


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), ("+7", 7), ("007", 7)])
def test_parse_snippet_id_accepts_plain_integers(raw, expected):
    assert parse_snippet_id(raw) == expected


@pytest.mark.parametrize("raw", ["1_0", " 1", "1 ", "١", "１", "", "-", "0x1"])
def test_parse_snippet_id_rejects_other_spellings(raw):
    with pytest.raises(NotFoundError):
        parse_snippet_id(raw)
