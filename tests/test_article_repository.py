"""Tests for the MongoDB article repository."""

from datetime import datetime

from bson.objectid import ObjectId


class TestSave:

    def test_assigns_id_on_insert(self, repository, make_article):
        saved = repository.save(make_article("Rain Expected", datetime(2024, 5, 10, 8, 0)))

        assert saved.id is not None
        assert repository.find_by_id(saved.id) == saved

    def test_overwrites_when_id_present(self, repository, make_article):
        saved = repository.save(make_article("Rain Expected", datetime(2024, 5, 10, 8, 0), "old"))

        repository.save(saved.model_copy(update={"description": "new"}))

        assert len(repository.find_all()) == 1
        assert repository.find_by_id(saved.id).description == "new"

    def test_save_all_mixes_inserts_and_replacements(self, repository, make_article):
        existing = repository.save(make_article("First", datetime(2024, 5, 10, 8, 0)))
        updated = existing.model_copy(update={"description": "edited"})

        saved = repository.save_all([
            make_article("Second", datetime(2024, 5, 10, 9, 0)),
            updated,
            make_article("Third", datetime(2024, 5, 10, 10, 0)),
        ])

        assert [a.headline for a in saved] == ["Second", "First", "Third"]
        assert all(a.id for a in saved)
        assert saved[1].id == existing.id
        assert len(repository.find_all()) == 3
        assert repository.find_by_id(existing.id).description == "edited"


class TestLookups:

    def test_find_by_id_with_unknown_or_malformed_id(self, repository):
        assert repository.find_by_id(str(ObjectId())) is None
        assert repository.find_by_id("not-an-object-id") is None

    def test_find_by_headline_is_exact(self, repository, make_article):
        repository.save(make_article("Rain Expected", datetime(2024, 5, 10, 8, 0)))

        assert repository.find_by_headline("Rain Expected").headline == "Rain Expected"
        assert repository.find_by_headline("rain expected") is None

    def test_range_is_closed_open(self, repository, make_article):
        repository.save_all([
            make_article("At start", datetime(2024, 5, 10, 12, 0)),
            make_article("Inside", datetime(2024, 5, 10, 15, 0)),
            make_article("At end", datetime(2024, 5, 10, 18, 0)),
        ])

        found = repository.find_by_publication_time_between(
            datetime(2024, 5, 10, 12, 0), datetime(2024, 5, 10, 18, 0)
        )

        assert [a.headline for a in found] == ["At start", "Inside"]


class TestDelete:

    def test_delete_removes_article(self, repository, make_article):
        saved = repository.save(make_article("Rain Expected", datetime(2024, 5, 10, 8, 0)))

        repository.delete_by_id(saved.id)

        assert repository.find_by_id(saved.id) is None

    def test_delete_is_idempotent(self, repository):
        repository.delete_by_id(str(ObjectId()))
        repository.delete_by_id("garbage")

        assert repository.find_all() == []
