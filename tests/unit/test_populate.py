"""
Unit tests for reference population.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from mdb_crud.crud.populate import populate

STUDIO_A = ObjectId("507f191e810c19729de860ea")
STUDIO_B = ObjectId("507f191e810c19729de860eb")
OWNER = ObjectId("507f191e810c19729de860ec")


def make_cursor(docs):
    return MagicMock(to_list=AsyncMock(return_value=list(docs)))


class TestPopulate:
    """Test populate."""

    @pytest.mark.asyncio
    async def test_single_reference_replaced(self, mock_database):
        studios = mock_database["studios"]
        studios.find.return_value = make_cursor([{"_id": STUDIO_A, "name": "North"}])
        docs = [{"_id": 1, "studio": STUDIO_A}]

        result = await populate(
            mock_database, docs, [{"path": "studio", "collection": "studios"}]
        )

        assert result is docs
        assert docs[0]["studio"] == {"_id": STUDIO_A, "name": "North"}
        studios.find.assert_called_once_with({"_id": {"$in": [STUDIO_A]}}, None)

    @pytest.mark.asyncio
    async def test_list_of_references_drops_missing(self, mock_database):
        mock_database["studios"].find.return_value = make_cursor([{"_id": STUDIO_B}])
        docs = [{"studios": [STUDIO_A, STUDIO_B]}]

        await populate(mock_database, docs, [{"path": "studios", "collection": "studios"}])

        assert docs[0]["studios"] == [{"_id": STUDIO_B}]

    @pytest.mark.asyncio
    async def test_unmatched_single_reference_becomes_none(self, mock_database):
        docs = [{"studio": STUDIO_A}]

        await populate(mock_database, docs, [{"path": "studio", "collection": "studios"}])

        assert docs[0]["studio"] is None

    @pytest.mark.asyncio
    async def test_string_ids_normalized_and_select_forwarded(self, mock_database):
        studios = mock_database["studios"]
        studios.find.return_value = make_cursor([{"_id": STUDIO_A, "name": "North"}])
        docs = [{"studio": str(STUDIO_A)}, {"studio": str(STUDIO_A)}]

        await populate(
            mock_database,
            docs,
            [{"path": "studio", "collection": "studios", "select": {"name": 1}}],
        )

        query, projection = studios.find.call_args.args
        assert query == {"_id": {"$in": [STUDIO_A, STUDIO_A]}}
        assert projection == {"name": 1}
        assert docs[0]["studio"]["name"] == "North"
        assert docs[1]["studio"]["name"] == "North"

    @pytest.mark.asyncio
    async def test_dotted_path_through_arrays(self, mock_database):
        mock_database["studios"].find.return_value = make_cursor(
            [{"_id": STUDIO_A, "name": "North"}]
        )
        docs = [{"memberships": [{"studio": STUDIO_A}, {"studio": STUDIO_A}]}]

        await populate(
            mock_database, docs, [{"path": "memberships.studio", "collection": "studios"}]
        )

        assert [m["studio"]["name"] for m in docs[0]["memberships"]] == ["North", "North"]

    @pytest.mark.asyncio
    async def test_embedded_documents_left_in_place(self, mock_database):
        mock_database["studios"].find.return_value = make_cursor([{"_id": STUDIO_A}])
        embedded = {"name": "Pop-up"}
        docs = [
            {"studio": embedded},
            {"studio": STUDIO_A},
            {"studios": [embedded, STUDIO_A]},
        ]

        await populate(
            mock_database,
            docs,
            [
                {"path": "studio", "collection": "studios"},
                {"path": "studios", "collection": "studios"},
            ],
        )

        assert docs[0]["studio"] is embedded
        assert docs[1]["studio"] == {"_id": STUDIO_A}
        assert docs[2]["studios"] == [embedded, {"_id": STUDIO_A}]

    @pytest.mark.asyncio
    async def test_nested_directives(self, mock_database):
        mock_database["studios"].find.return_value = make_cursor(
            [{"_id": STUDIO_A, "owner": OWNER}]
        )
        mock_database["users"].find.return_value = make_cursor(
            [{"_id": OWNER, "email": "owner@x.com"}]
        )
        docs = [{"studio": STUDIO_A}]

        await populate(
            mock_database,
            docs,
            [
                {
                    "path": "studio",
                    "collection": "studios",
                    "populate": [{"path": "owner", "collection": "users"}],
                }
            ],
        )

        assert docs[0]["studio"]["owner"]["email"] == "owner@x.com"

    @pytest.mark.asyncio
    async def test_no_references_skips_query(self, mock_database):
        docs = [{"name": "no refs"}]

        await populate(mock_database, docs, [{"path": "studio", "collection": "studios"}])

        mock_database["studios"].find.assert_not_called()
        assert docs == [{"name": "no refs"}]

    @pytest.mark.asyncio
    async def test_empty_inputs_returned_as_is(self, mock_database):
        assert await populate(mock_database, [], [{"path": "a", "collection": "b"}]) == []
        docs = [{"a": 1}]
        assert await populate(mock_database, docs, None) is docs

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "directive, error",
        [
            ({"collection": "studios"}, ValueError),
            ({"path": "studio"}, ValueError),
            ("studio", TypeError),
        ],
    )
    async def test_malformed_directive(self, mock_database, directive, error):
        with pytest.raises(error):
            await populate(mock_database, [{"studio": STUDIO_A}], [directive])
