"""
Unit tests for MongoDB document helpers.
"""

from datetime import datetime

from bson import ObjectId

from mdb_crud.utils.mongo import clean_mongo_doc, clean_mongo_docs, get_path_values

OID = ObjectId("507f1f77bcf86cd799439011")


class TestCleanMongoDoc:
    """Test clean_mongo_doc / clean_mongo_docs."""

    def test_converts_driver_types_recursively(self):
        doc = {
            "_id": OID,
            "refs": [OID, {"at": datetime(2024, 1, 1)}],
            "system": {"createdAt": datetime(2024, 1, 1, 12, 30)},
            "count": 3,
        }

        assert clean_mongo_doc(doc) == {
            "_id": str(OID),
            "refs": [str(OID), {"at": "2024-01-01T00:00:00"}],
            "system": {"createdAt": "2024-01-01T12:30:00"},
            "count": 3,
        }

    def test_returns_independent_copy(self):
        doc = {"system": {"archived": False}, "tags": ["a"]}

        cleaned = clean_mongo_doc(doc)
        cleaned["system"]["archived"] = True
        cleaned["tags"].append("b")

        assert doc == {"system": {"archived": False}, "tags": ["a"]}

    def test_none(self):
        assert clean_mongo_doc(None) is None
        assert clean_mongo_docs(None) == []
        assert clean_mongo_docs([]) == []

    def test_many(self):
        assert clean_mongo_docs([{"_id": OID}, {"_id": OID}]) == [
            {"_id": str(OID)},
            {"_id": str(OID)},
        ]


class TestGetPathValues:
    """Test get_path_values."""

    def test_top_level(self):
        assert get_path_values({"a": 1}, "a") == [1]

    def test_dotted(self):
        assert get_path_values({"a": {"b": {"c": 2}}}, "a.b.c") == [2]

    def test_traverses_lists(self):
        doc = {"items": [{"ref": 1}, {"ref": 2}, {"other": 3}]}

        assert get_path_values(doc, "items.ref") == [1, 2]

    def test_list_of_documents_at_root(self):
        assert get_path_values([{"a": 1}, {"a": [2, 3]}], "a") == [1, [2, 3]]

    def test_missing_path(self):
        assert get_path_values({"a": 1}, "b") == []
        assert get_path_values({"a": 1}, "a.b") == []
