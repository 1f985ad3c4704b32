import os
from dataclasses import dataclass

from sst_fixtures.layout import DEFAULT_ROOT
from sst_fixtures.writer import DEFAULT_BLOOM_BITS_PER_KEY

LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Config:
    root: str = str(DEFAULT_ROOT)
    log_format: str = "text"
    bloom_bits_per_key: float = DEFAULT_BLOOM_BITS_PER_KEY

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("SST_FIXTURES_LOG_FORMAT", "text").strip().lower()
        if log_format not in LOG_FORMATS:
            raise RuntimeError(
                f"SST_FIXTURES_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}"
            )

        raw_bits = os.environ.get("SST_FIXTURES_BLOOM_BITS", str(DEFAULT_BLOOM_BITS_PER_KEY))
        try:
            bloom_bits_per_key = float(raw_bits)
        except ValueError:
            raise RuntimeError("SST_FIXTURES_BLOOM_BITS must be a number") from None
        if bloom_bits_per_key <= 0:
            raise RuntimeError("SST_FIXTURES_BLOOM_BITS must be positive")

        return cls(
            root=os.environ.get("SST_FIXTURES_ROOT", str(DEFAULT_ROOT)),
            log_format=log_format,
            bloom_bits_per_key=bloom_bits_per_key,
        )
