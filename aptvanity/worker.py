"""
Multiprocessing worker for vanity address search.

IMPORTANT: This module must contain only top-level importable functions.
On macOS/Windows, multiprocessing uses 'spawn' which requires worker
targets and the event types they send to be importable by name.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from aptvanity.core import derive_multisig_address, generate_and_derive
from aptvanity.matcher import SearchConfig, matches

logger = logging.getLogger(__name__)

PROGRESS_BATCH = 1000
MULTISIG_NONCE = 0


@dataclass(frozen=True)
class ProgressEvent:
    """Sent once per PROGRESS_BATCH attempts."""
    count: int = PROGRESS_BATCH


@dataclass(frozen=True)
class ResultEvent:
    """A single vanity address match."""
    address: str
    private_key: str
    multisig_address: Optional[str] = None

    @property
    def search_address(self) -> str:
        """The address that was tested against the pattern."""
        return self.multisig_address or self.address


def search_worker(config: SearchConfig, event_queue, stop_event, batch_size: int = PROGRESS_BATCH):
    """Worker process: generate keys in a tight loop and report matches.

    Runs until stop_event is set or the process is terminated. Matches do
    not stop the worker; the coordinator decides when enough were found.

    Args:
        config: Shared read-only SearchConfig.
        event_queue: multiprocessing.Queue receiving ProgressEvent / ResultEvent.
        stop_event: multiprocessing.Event, checked once per batch.
        batch_size: Attempts per ProgressEvent.
    """
    prefix, suffix, multisig = config.prefix, config.suffix, config.multisig

    try:
        while not stop_event.is_set():
            for _ in range(batch_size):
                prv_bytes, address = generate_and_derive()

                if multisig:
                    search_hex = derive_multisig_address(address, MULTISIG_NONCE).hex()
                else:
                    search_hex = address.hex()

                if not matches(search_hex, prefix, suffix):
                    continue

                event_queue.put(ResultEvent(
                    address=address.hex(),
                    private_key=prv_bytes.hex(),
                    multisig_address=search_hex if multisig else None,
                ))

            event_queue.put(ProgressEvent(batch_size))
    except Exception:
        logger.exception("Search worker failed; it will produce no further results")
