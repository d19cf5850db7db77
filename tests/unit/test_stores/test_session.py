"""
Unit tests for stores.session and stores.views modules.
"""
import pytest
from core.exceptions import InvalidArgumentError
from core.models import OutputCard, Region, RegionResult


class TestDerivedViews:
    """Tests for current image and total count views."""

    def test_empty_session(self, session):
        assert session.current_image.value is None
        assert session.total_images.value == 0

    def test_total_follows_queue(self, session, record_factory):
        totals = []
        session.total_images.subscribe(totals.append)

        session.images.add([record_factory("A"), record_factory("B")])
        session.images.remove("img-A")

        assert totals == [0, 2, 1]

    def test_current_image_follows_index(self, session, record_factory):
        session.images.add([record_factory("A"), record_factory("B")])
        assert session.current_image.value.id == "img-A"

        session.current_index.select(1)

        assert session.current_image.value.id == "img-B"

    def test_current_image_follows_reorder(self, session, record_factory):
        session.images.add([record_factory("A"), record_factory("B")])

        session.images.reorder(0, 1)

        assert session.current_image.value.id == "img-B"

    def test_current_image_sees_rotation(self, session, record_factory):
        session.images.add([record_factory("A")])

        session.images.rotate("img-A", 90)

        assert session.current_image.value.rotation_degrees == 90

    def test_index_past_end(self, session, record_factory):
        session.images.add([record_factory("A")])

        session.current_index.select(4)

        assert session.current_image.value is None

    def test_negative_index_rejected(self, session):
        with pytest.raises(InvalidArgumentError):
            session.current_index.select(-1)


class TestSession:

    def test_results_survive_image_removal(self, session, record_factory):
        """Test cards outlive their image; only clear_results drops them."""
        session.images.add([record_factory("A")])
        session.regions.add_region("img-A", Region(id="r1", x=0, y=0, width=1, height=1))
        session.results.upsert_card(OutputCard("img-A", "A", [RegionResult("r1", "x")]))

        session.images.remove("img-A")

        assert session.regions.regions_for("img-A") == ()
        assert session.results.card_for("img-A") is not None

    def test_clear_results_independent_of_queue(self, session, record_factory):
        session.images.add([record_factory("A")])
        session.regions.add_region("img-A", Region(id="r1", x=0, y=0, width=1, height=1))
        session.results.upsert_card(OutputCard("img-A", "A", [RegionResult("r1", "x")]))
        session.results.upsert_card(OutputCard("gone", "gone", [RegionResult("r1", "y")]))

        session.clear_results()

        assert session.results.value == ()
        assert len(session.images) == 1
        assert len(session.regions.regions_for("img-A")) == 1

    def test_sessions_do_not_share_state(self, session, record_factory):
        from stores.session import ScanSession

        other = ScanSession()
        session.images.add([record_factory("A")])

        assert len(other.images) == 0
        other.close()
