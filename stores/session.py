"""
Scan session - owns every store of one editing session.

Components receive the session (or the single store they need) explicitly;
there is no process-wide state.
"""
from stores.image_queue import ImageQueue
from stores.region_ledger import RegionLedger
from stores.result_ledger import ResultLedger
from stores.views import CurrentIndex, current_image_view, total_images_view


class ScanSession:
    """Image queue, region ledger, result ledger and their derived views."""

    def __init__(self):
        self.regions = RegionLedger()
        self.images = ImageQueue(region_ledger=self.regions)
        self.results = ResultLedger()
        self.current_index = CurrentIndex()
        self.current_image = current_image_view(self.images, self.current_index)
        self.total_images = total_images_view(self.images)

    def clear_results(self) -> None:
        """Empty the result ledger, whatever the queue holds."""
        self.results.clear()

    def close(self) -> None:
        """Detach derived views from their sources."""
        self.current_image.close()
        self.total_images.close()
