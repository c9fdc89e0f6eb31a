import logging

from shortlink_app.exceptions import DuplicateKeyError, ExhaustedRetriesError
from shortlink_app.models.records import ShortenedUrl, ShortUrlRecord
from shortlink_app.services.short_id_strategies import ShortIdStrategy
from shortlink_app.storage.strategies import UrlStore
from shortlink_app.validators import validate_original_url

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class ShorteningService:
    """
    Creates short URLs: validation, identifier allocation and insert.

    Built once at startup with its collaborators injected; holds no mutable
    state, so one instance serves all request threads.
    """

    def __init__(
        self,
        store: UrlStore,
        generator: ShortIdStrategy,
        base_url: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize shortening service.

        Args:
            store: URL store enforcing short_id uniqueness
            generator: Source of candidate short ids
            base_url: Public base URL, short URLs are base_url + "/" + short_id
            max_attempts: Hard ceiling on allocation attempts per create
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.store = store
        self.generator = generator
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts

    def build_short_url(self, short_id: str) -> str:
        return f"{self.base_url}/{short_id}"

    def create_short_url(self, raw_url) -> ShortenedUrl:
        """Create a new short URL

        Process:
        1. Validate and trim the URL
        2. Ask the generator for a candidate
        3. Skip candidates the store already knows (cheap pre-check)
        4. Insert; a DuplicateKeyError means another writer took the
           candidate after our pre-check
        5. Repeat from 2 until inserted or attempts run out

        Pre-check collisions and insert races draw from one shared budget of
        max_attempts, counted across the whole call and never reset.

        Raises:
            ValidationError: raw_url is missing or malformed
            ExhaustedRetriesError: no insert succeeded within max_attempts
            DatabaseError: the store failed
        """
        original_url = validate_original_url(raw_url)

        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator.generate()

            if self.store.find_by_short_id(candidate) is not None:
                logger.warning(
                    "Short ID collision on %s (attempt %d/%d)",
                    candidate, attempt, self.max_attempts,
                )
                continue

            try:
                record = self.store.insert_unique(
                    ShortUrlRecord(original_url=original_url, short_id=candidate)
                )
            except DuplicateKeyError:
                logger.warning(
                    "Short ID %s taken by a concurrent writer (attempt %d/%d)",
                    candidate, attempt, self.max_attempts,
                )
                continue

            logger.info("Created short URL: %s -> %s", record.short_id, record.original_url)
            return ShortenedUrl(
                short_id=record.short_id,
                short_url=self.build_short_url(record.short_id),
                original_url=record.original_url,
            )

        logger.error("Gave up allocating a short ID after %d attempts", self.max_attempts)
        raise ExhaustedRetriesError(
            f"Failed to generate unique Short ID after {self.max_attempts} attempts"
        )
