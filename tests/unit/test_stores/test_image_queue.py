"""
Unit tests for stores.image_queue module.
"""
import pytest
from core.exceptions import InvalidArgumentError
from core.models import ProcessingSettings, Region
from stores.image_queue import ImageQueue
from stores.region_ledger import RegionLedger


@pytest.fixture
def ledger():
    return RegionLedger()


@pytest.fixture
def queue(ledger):
    return ImageQueue(region_ledger=ledger)


@pytest.fixture
def abc_queue(queue, record_factory):
    queue.add([record_factory("A"), record_factory("B"), record_factory("C")])
    return queue


class TestAdd:
    """Tests for ImageQueue.add."""

    def test_deduplicates_by_source_path(self, queue, record_factory):
        """Test add([A,B]); add([B,C]) yields [A,B,C]."""
        a, b, c = record_factory("A"), record_factory("B"), record_factory("C")

        queue.add([a, b])
        queue.add([b, c])

        assert queue.ids() == ["img-A", "img-B", "img-C"]

    def test_existing_entry_not_replaced(self, queue, record_factory):
        """Test re-adding a path keeps the original record."""
        original = record_factory("A")
        queue.add([original])
        queue.rotate(original.id, 90)

        queue.add([record_factory("A", id="other-id")])

        assert len(queue) == 1
        assert queue.get("img-A").rotation_degrees == 90
        assert queue.get("other-id") is None

    def test_duplicates_within_one_call(self, queue, record_factory):
        queue.add([record_factory("A"), record_factory("A", id="dup")])

        assert queue.ids() == ["img-A"]

    def test_dedup_uses_path_not_name(self, queue, record_factory):
        queue.add([
            record_factory("A", source_path="/x/page.png"),
            record_factory("B", source_path="/y/page.png"),
        ])

        assert len(queue) == 2

    def test_deduplicates_by_id(self, queue, record_factory):
        """Test a repeated id from a different path is skipped, so remove stays exact."""
        queue.add([record_factory("A")])
        queue.add([
            record_factory("B", id="img-A"),
            record_factory("C"),
            record_factory("D", id="img-C"),
        ])

        assert queue.ids() == ["img-A", "img-C"]
        assert queue.get("img-A").source_path == "/scans/A"

        queue.remove("img-A")

        assert queue.ids() == ["img-C"]

    def test_no_notification_when_nothing_new(self, abc_queue, record_factory):
        seen = []
        abc_queue.subscribe(seen.append)

        abc_queue.add([record_factory("A")])

        assert len(seen) == 1


class TestRemove:
    """Tests for ImageQueue.remove."""

    def test_remove(self, abc_queue):
        abc_queue.remove("img-B")

        assert abc_queue.ids() == ["img-A", "img-C"]

    def test_remove_absent_is_noop(self, abc_queue):
        abc_queue.remove("nope")
        abc_queue.remove("img-A")
        abc_queue.remove("img-A")

        assert abc_queue.ids() == ["img-B", "img-C"]

    def test_cascades_to_regions(self, abc_queue, ledger):
        """Test regions go away with their image and can be re-created."""
        ledger.add_region("img-B", Region(id="r1", x=0, y=0, width=1, height=1))
        ledger.add_region("img-B", Region(id="r2", x=0, y=0, width=1, height=1))
        ledger.add_region("img-C", Region(id="r3", x=0, y=0, width=1, height=1))

        abc_queue.remove("img-B")

        assert ledger.regions_for("img-B") == ()
        assert "img-B" not in ledger.value
        assert [r.id for r in ledger.regions_for("img-C")] == ["r3"]

        fresh = Region(id="r9", x=0, y=0, width=1, height=1)
        ledger.add_region("img-B", fresh)
        assert ledger.regions_for("img-B") == (fresh,)

    def test_no_intermediate_state_observed(self, abc_queue, ledger):
        """Test observers never see the image gone with its regions left."""
        ledger.add_region("img-A", Region(id="r1", x=0, y=0, width=1, height=1))
        observed = []

        def check(_):
            observed.append(("img-A" in abc_queue.ids(), "img-A" in ledger.value))

        abc_queue.subscribe(check)
        ledger.subscribe(check)
        observed.clear()

        abc_queue.remove("img-A")

        assert observed
        assert all(state == (False, False) for state in observed)

    def test_queue_without_ledger(self, record_factory):
        queue = ImageQueue()
        queue.add([record_factory("A")])

        queue.remove("img-A")

        assert len(queue) == 0


class TestReorder:
    """Tests for ImageQueue.reorder."""

    def test_move_forward(self, abc_queue):
        """Test reorder(0, 2) on [A,B,C] yields [B,C,A]."""
        abc_queue.reorder(0, 2)

        assert abc_queue.ids() == ["img-B", "img-C", "img-A"]

    def test_move_backward(self, abc_queue):
        abc_queue.reorder(2, 0)

        assert abc_queue.ids() == ["img-C", "img-A", "img-B"]

    def test_is_permutation(self, abc_queue, ledger):
        """Test ids and region mapping survive reordering."""
        region = Region(id="r1", x=1, y=1, width=5, height=5)
        ledger.add_region("img-A", region)
        before = sorted(abc_queue.ids())

        abc_queue.reorder(0, 1)
        abc_queue.reorder(2, 0)

        assert sorted(abc_queue.ids()) == before
        assert ledger.regions_for("img-A") == (region,)

    @pytest.mark.parametrize("from_index,to_index", [(3, 0), (0, 3), (-1, 0), (0, -1), (1.0, 0)])
    def test_out_of_range_rejected(self, abc_queue, from_index, to_index):
        """Test bad indices raise and leave the order untouched."""
        with pytest.raises(InvalidArgumentError):
            abc_queue.reorder(from_index, to_index)

        assert abc_queue.ids() == ["img-A", "img-B", "img-C"]

    def test_empty_queue_rejects(self, queue):
        with pytest.raises(InvalidArgumentError):
            queue.reorder(0, 0)

    def test_same_index_noop(self, abc_queue):
        seen = []
        abc_queue.subscribe(seen.append)

        abc_queue.reorder(1, 1)

        assert len(seen) == 1


class TestRotate:
    """Tests for ImageQueue.rotate."""

    def test_round_trip(self, abc_queue):
        """Test +370 then -10 from 0 returns to 0."""
        abc_queue.rotate("img-A", 370)
        assert abc_queue.get("img-A").rotation_degrees == 10

        abc_queue.rotate("img-A", -10)
        assert abc_queue.get("img-A").rotation_degrees == 0

    def test_negative_delta(self, abc_queue):
        abc_queue.rotate("img-B", -90)

        assert abc_queue.get("img-B").rotation_degrees == 270

    def test_only_target_changes(self, abc_queue):
        abc_queue.rotate("img-B", 90)

        assert abc_queue.get("img-A").rotation_degrees == 0
        assert abc_queue.get("img-C").rotation_degrees == 0
        assert abc_queue.index_of("img-B") == 1

    def test_unknown_id_ignored(self, abc_queue):
        abc_queue.rotate("nope", 90)

        assert [r.rotation_degrees for r in abc_queue.value] == [0, 0, 0]


class TestProcessingSettings:
    """Tests for ImageQueue.set_processing_settings."""

    def test_replaces_wholesale(self, abc_queue):
        abc_queue.set_processing_settings("img-A", ProcessingSettings(2.0, 128))
        abc_queue.set_processing_settings("img-A", ProcessingSettings(threshold=-1))

        assert abc_queue.get("img-A").processing_settings == ProcessingSettings(0.0, -1)

    def test_clear_settings(self, abc_queue):
        abc_queue.set_processing_settings("img-A", ProcessingSettings(2.0, 128))
        abc_queue.set_processing_settings("img-A", None)

        assert abc_queue.get("img-A").processing_settings is None

    def test_malformed_settings_rejected(self, abc_queue):
        with pytest.raises(InvalidArgumentError):
            abc_queue.set_processing_settings("img-A", {'blur_radius': 1, 'threshold': 0})

    def test_keeps_rotation(self, abc_queue):
        abc_queue.rotate("img-A", 180)
        abc_queue.set_processing_settings("img-A", ProcessingSettings(1.0))

        assert abc_queue.get("img-A").rotation_degrees == 180
