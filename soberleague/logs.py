"""Substance log storage and window queries using polars."""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import polars as pl

from .models import SubstanceLog
from .schemas import LogsFile
from .utils import load_json, save_json

logger = logging.getLogger('soberleague.logs')

LOG_SCHEMA = {
    'user_id': pl.Utf8,
    'substance': pl.Utf8,
    'date': pl.Date,
    'points': pl.Float64,
}


class SubstanceLogStore:
    """Holds every player's substance logs and answers date-window queries.

    A log counts as harmful when its substance's base points in the catalog
    are positive. Substances missing from the catalog fall back to the points
    stored on the log itself.
    """

    def __init__(
        self,
        logs: Optional[pl.DataFrame] = None,
        substance_points: Optional[dict[str, float]] = None,
    ):
        self._logs = logs if logs is not None else pl.DataFrame(schema=LOG_SCHEMA)
        self._pending: list[dict] = []
        self.substance_points = dict(substance_points or {})
        self._catalog = pl.DataFrame(
            {
                'substance': list(self.substance_points),
                'base_points': [float(v) for v in self.substance_points.values()],
            },
            schema={'substance': pl.Utf8, 'base_points': pl.Float64},
        )

    @classmethod
    def from_records(
        cls,
        records: Iterable[SubstanceLog],
        substance_points: Optional[dict[str, float]] = None,
    ) -> 'SubstanceLogStore':
        rows = [
            {'user_id': r.user_id, 'substance': r.substance, 'date': r.date, 'points': float(r.points)}
            for r in records
        ]
        return cls(pl.DataFrame(rows, schema=LOG_SCHEMA), substance_points)

    @classmethod
    def from_json(
        cls,
        path: str | Path,
        substance_points: Optional[dict[str, float]] = None,
    ) -> 'SubstanceLogStore':
        """Load logs from a substance_logs.json file."""
        logs_file = load_json(path, schema=LogsFile)
        logger.info(f'Loaded {len(logs_file.logs)} substance logs from {path}')
        return cls.from_records(
            (
                SubstanceLog(user_id=r.user_id, substance=r.substance, date=r.date, points=r.points)
                for r in logs_file.logs
            ),
            substance_points,
        )

    def __len__(self) -> int:
        return self._frame().height

    def add(self, log: SubstanceLog) -> None:
        """
        Append a single log entry.

        Rows are buffered and joined to the frame by the next query.
        """
        self._pending.append(
            {'user_id': log.user_id, 'substance': log.substance, 'date': log.date, 'points': float(log.points)}
        )

    def _frame(self) -> pl.DataFrame:
        if self._pending:
            self._logs = pl.concat([self._logs, pl.DataFrame(self._pending, schema=LOG_SCHEMA)])
            self._pending = []
        return self._logs

    def fetch(self, user_id: str, start: date, end: date) -> pl.DataFrame:
        """
        Get a player's logs dated within ``[start, end)``.

        Args:
            user_id: Account the logs belong to
            start: First day of the window
            end: Day after the last day of the window

        Returns:
            DataFrame with date, substance, points and is_harmful columns
        """
        window = self._frame().filter(
            (pl.col('user_id') == user_id)
            & (pl.col('date') >= start)
            & (pl.col('date') < end)
        )
        return (
            window.join(self._catalog, on='substance', how='left')
            .with_columns(
                (pl.coalesce(pl.col('base_points'), pl.col('points')) > 0).alias('is_harmful')
            )
            .select(['date', 'substance', 'points', 'is_harmful'])
            .sort('date')
        )

    def save(self, path: str | Path) -> None:
        """Write all logs to a substance_logs.json file."""
        logs_file = LogsFile.model_validate({'logs': self._frame().to_dicts()})
        save_json(path, logs_file)


def summarize_window(logs: pl.DataFrame) -> tuple[float, bool]:
    """Return (total_points, used_harmful) for a frame returned by fetch()."""
    if logs.is_empty():
        return 0.0, False
    return float(logs['points'].sum()), bool(logs['is_harmful'].any())
