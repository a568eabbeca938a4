"""Unit tests for the primary + secondary address list."""

from services.youth_profile_service.schemas import AddressDraft, AddressListModel


def _list_with(*cities: str) -> AddressListModel:
    model = AddressListModel()
    for city in cities:
        model.add_secondary({"city": city})
    return model


class TestAddSecondary:
    def test_returns_insertion_index(self):
        model = AddressListModel()
        assert model.add_secondary() == 0
        assert model.add_secondary() == 1
        assert len(model.secondaries) == 2

    def test_default_entry_is_blank_non_primary(self):
        model = AddressListModel()
        index = model.add_secondary()
        entry = model.secondaries[index]
        assert entry.is_blank()
        assert entry.primary is False
        assert entry.country_code == "FI"

    def test_defaults_are_copied_not_shared(self):
        template = AddressDraft(city="Espoo", primary=True)
        model = AddressListModel()
        model.add_secondary(template)
        model.secondaries[0].city = "Vantaa"

        assert template.city == "Espoo"
        assert model.secondaries[0].primary is False


class TestRemoveSecondary:
    def test_preserves_order_of_remaining_entries(self):
        model = _list_with("Espoo", "Vantaa", "Turku")
        model.remove_secondary(1)
        assert [a.city for a in model.secondaries] == ["Espoo", "Turku"]

    def test_out_of_range_is_a_no_op(self):
        model = _list_with("Espoo")
        model.remove_secondary(5)
        model.remove_secondary(-1)
        assert [a.city for a in model.secondaries] == ["Espoo"]

    def test_primary_is_untouched(self):
        model = _list_with("Espoo")
        model.primary.city = "Helsinki"
        model.remove_secondary(0)
        assert model.primary.city == "Helsinki"
        assert model.secondaries == []


class TestSnapshot:
    def test_snapshot_is_detached_copy(self):
        model = _list_with("Espoo")
        snapshot = model.snapshot()

        model.secondaries[0].city = "Vantaa"
        model.add_secondary()

        assert [a.city for a in snapshot.secondaries] == ["Espoo"]
        assert snapshot.primary.primary is True

    def test_exactly_one_primary_after_validation(self):
        model = AddressListModel.model_validate(
            {"primary": {"city": "Helsinki"}, "secondaries": [{"primary": True}]}
        )
        assert model.primary.primary is True
        assert [a.primary for a in model.secondaries] == [False]


class TestIsBlank:
    def test_loaded_entry_is_never_blank(self):
        assert AddressDraft(id="A2").is_blank() is False

    def test_whitespace_only_is_blank(self):
        assert AddressDraft(address="  ", city=" ").is_blank() is True
