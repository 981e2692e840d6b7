"""
Dense weight tables of the n-tuple network and their binary persistence.

File layout, all little-endian::

    uint32 table_count
    table_count x (uint64 length, length x float32)

There is no version field and no checksum. Failing to open a file, for reading or writing, is fatal:
an agent without its weights cannot act meaningfully, so the process stops.
"""

from __future__ import annotations

import logging
from os import PathLike

from numpy import array, dtype, fromfile, ndarray, stack, zeros

# ##>: Ranks 0..14 on six cells.
TABLE_SIZE = 15**6

COUNT_DTYPE = dtype('<u4')
LENGTH_DTYPE = dtype('<u8')
WEIGHT_DTYPE = dtype('<f4')

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def _fatal(message: str, *args) -> SystemExit:
    _logger.critical(message, *args)
    return SystemExit(message % args)


class WeightStore:
    """
    A stack of equally sized weight tables, one per pattern.

    Attributes
    ----------
    tables : ndarray
        Float32 array of shape (table_count, table_size). Row ``i`` is the table of pattern ``i``.
    """

    def __init__(self, tables: ndarray):
        self.tables = tables

    def __len__(self) -> int:
        return len(self.tables)

    def __getitem__(self, index: int) -> ndarray:
        return self.tables[index]

    @classmethod
    def init(cls, table_count: int, table_size: int = TABLE_SIZE) -> WeightStore:
        """
        Allocate zero-filled tables.

        Parameters
        ----------
        table_count : int
            Number of tables, one per pattern.
        table_size : int
            Entries per table.

        Returns
        -------
        WeightStore
            The new store.
        """
        _logger.info('Initializing %d weight tables of %d entries', table_count, table_size)
        return cls(zeros((table_count, table_size), dtype=WEIGHT_DTYPE))

    @classmethod
    def load(cls, path: str | PathLike) -> WeightStore:
        """
        Read tables from a weight file.

        Parameters
        ----------
        path : str | PathLike
            Path of the weight file.

        Returns
        -------
        WeightStore
            The loaded store.

        Raises
        ------
        SystemExit
            If the file cannot be opened or ends before the announced data.
        """
        try:
            stream = open(path, 'rb')
        except OSError as error:
            raise _fatal('Cannot open weight file %s for reading: %s', path, error) from error

        with stream:
            header = fromfile(stream, dtype=COUNT_DTYPE, count=1)
            if header.size != 1:
                raise _fatal('Unexpected end of weight file %s', path)

            tables = []
            for _ in range(int(header[0])):
                length = fromfile(stream, dtype=LENGTH_DTYPE, count=1)
                if length.size != 1:
                    raise _fatal('Unexpected end of weight file %s', path)
                table = fromfile(stream, dtype=WEIGHT_DTYPE, count=int(length[0]))
                if table.size != int(length[0]):
                    raise _fatal('Unexpected end of weight file %s', path)
                tables.append(table)

        if len({table.size for table in tables}) > 1:
            raise _fatal('Weight tables of %s do not share the same size', path)

        _logger.info('Loaded %d weight tables from %s', len(tables), path)
        if not tables:
            return cls(zeros((0, 0), dtype=WEIGHT_DTYPE))
        return cls(stack(tables).astype(WEIGHT_DTYPE, copy=False))

    def save(self, path: str | PathLike) -> None:
        """
        Write the tables to a weight file, truncating any existing file.

        Parameters
        ----------
        path : str | PathLike
            Path of the weight file.

        Raises
        ------
        SystemExit
            If the file cannot be opened for writing.
        """
        try:
            stream = open(path, 'wb')
        except OSError as error:
            raise _fatal('Cannot open weight file %s for writing: %s', path, error) from error

        with stream:
            array([len(self.tables)], dtype=COUNT_DTYPE).tofile(stream)
            for table in self.tables:
                array([table.size], dtype=LENGTH_DTYPE).tofile(stream)
                table.astype(WEIGHT_DTYPE, copy=False).tofile(stream)

        _logger.info('Saved %d weight tables to %s', len(self.tables), path)
