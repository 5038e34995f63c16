"""
Weight tables for learning agents.

A network is an ordered list of flat float32 tensors ("tables"), one weight
per encoded feature value.

File layout (little-endian):
    uint32 table_count
    float32[len(table_0)] table_0
    float32[len(table_1)] table_1
    ...

Table lengths are not stored in the file, so tables must be sized (init)
before they are loaded.
"""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Union

import numpy as np
import torch

from .errors import ConfigurationError, WeightFileError

logger = logging.getLogger(__name__)

COUNT_DTYPE = np.dtype("<u4")
WEIGHT_DTYPE = np.dtype("<f4")


def parse_sizes(info: str) -> List[int]:
    """Parse "65536,65536" (any non-digit separators) into table sizes."""
    if re.search(r"-\d", info):
        raise ConfigurationError(f"table sizes must be non-negative: {info!r}")
    return [int(s) for s in re.split(r"\D+", info) if s]


class WeightStore:
    """Ordered collection of weight tables."""

    def __init__(self):
        self.tables: List[torch.Tensor] = []

    def __len__(self) -> int:
        return len(self.tables)

    def __getitem__(self, i: int) -> torch.Tensor:
        return self.tables[i]

    def __iter__(self) -> Iterator[torch.Tensor]:
        return iter(self.tables)

    def sizes(self) -> List[int]:
        return [t.numel() for t in self.tables]

    def init(self, info: str):
        """Append one zero-filled table per size in info."""
        for size in parse_sizes(info):
            self.tables.append(torch.zeros(size, dtype=torch.float32))
        logger.debug("initialised tables %s", self.sizes())

    @torch.no_grad()
    def load(self, path: Union[str, Path]):
        """Read table contents from path into the already-sized tables."""
        try:
            f = open(path, "rb")
        except OSError as e:
            raise WeightFileError(f"cannot open weight file {path}: {e}") from e

        with f:
            header = np.fromfile(f, dtype=COUNT_DTYPE, count=1)
            if header.size != 1:
                raise WeightFileError(f"{path}: missing table count")
            count = int(header[0])
            if count > len(self.tables):
                raise WeightFileError(
                    f"{path}: holds {count} tables but only {len(self.tables)} are sized; "
                    f"pass init= with the table sizes"
                )
            del self.tables[count:]

            for i, table in enumerate(self.tables):
                data = np.fromfile(f, dtype=WEIGHT_DTYPE, count=table.numel())
                if data.size != table.numel():
                    raise WeightFileError(
                        f"{path}: table {i} truncated ({data.size} of {table.numel()} weights)"
                    )
                table.copy_(torch.from_numpy(data.astype(np.float32)))

        logger.info("loaded %d tables from %s", count, path)

    @torch.no_grad()
    def save(self, path: Union[str, Path]):
        """Write the table count and every table to path."""
        try:
            f = open(path, "wb")
        except OSError as e:
            raise WeightFileError(f"cannot open weight file {path}: {e}") from e

        with f:
            np.array([len(self.tables)], dtype=COUNT_DTYPE).tofile(f)
            for table in self.tables:
                table.detach().cpu().numpy().astype(WEIGHT_DTYPE).tofile(f)

        logger.info("saved %d tables to %s", len(self.tables), path)
