"""Progress display for multi-branch operations."""

import sys
from tqdm import tqdm

class ProgressTracker:
    """Show a progress bar while working through a batch of branches."""

    def __init__(self, enabled=True):
        """Initialize the progress tracker.

        Args:
            enabled (bool): Draw bars; when False every call is a no-op
        """
        self.enabled = enabled
        self.current_bar = None

    def create_bar(self, total, description, unit='branches'):
        """Create a new progress bar, closing any open one.

        Args:
            total (int): Total number of items
            description (str): Description of the operation
            unit (str): Unit name for items

        Returns:
            tqdm: Progress bar instance, or None when disabled
        """
        self.close()
        if not self.enabled:
            return None

        self.current_bar = tqdm(
            total=total,
            desc=description,
            unit=unit,
            ncols=100,
            file=sys.stdout
        )
        return self.current_bar

    def update(self, n=1, **postfix):
        """Advance the current bar, optionally updating its postfix."""
        if self.current_bar:
            self.current_bar.update(n)
            if postfix:
                self.current_bar.set_postfix(**postfix)

    def close(self):
        """Close the current progress bar."""
        if self.current_bar:
            self.current_bar.close()
            self.current_bar = None
