"""Pydantic schemas for JSON data validation."""

import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import DEFAULT_CLEAN_SHEET_BONUS, DEFAULT_SUBSTANCE_POINTS


class FixtureRecord(BaseModel):
    """Stored fixture."""

    player1: str = Field(..., min_length=1)
    player2: str = Field(..., min_length=1)
    week_number: int = Field(..., ge=1)
    season: int = Field(..., ge=1)
    start_date: datetime.date
    end_date: datetime.date
    player1_points: float | None = None
    player2_points: float | None = None
    clean_sheets: dict[str, bool] = Field(
        default_factory=lambda: {'player1': False, 'player2': False}
    )
    winner: str | None = Field(None, pattern=r'^(player1|player2|draw)$')
    league_points: dict[str, int] = Field(
        default_factory=lambda: {'player1': 0, 'player2': 0}
    )
    is_processed: bool = False

    @model_validator(mode='after')
    def validate_window(self):
        """Ensure the window is not empty."""
        if self.end_date <= self.start_date:
            raise ValueError(
                f'end_date {self.end_date} must be after start_date {self.start_date}'
            )
        return self

    @model_validator(mode='after')
    def validate_processed_state(self):
        """Processed fixtures carry points and a winner; unprocessed ones carry neither."""
        if self.is_processed:
            if self.player1_points is None or self.player2_points is None or self.winner is None:
                raise ValueError('Processed fixture is missing points or winner')
        elif self.winner is not None:
            raise ValueError('Unprocessed fixture cannot have a winner')
        return self

    class Config:
        extra = 'forbid'


class FixturesFile(BaseModel):
    """Complete fixtures.json file structure."""

    fixtures: list[FixtureRecord]

    class Config:
        extra = 'forbid'


class ParticipantRecord(BaseModel):
    """Rostered player and the account their logs belong to."""

    player_name: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    name: str = ''

    class Config:
        extra = 'forbid'


class ParticipantsFile(BaseModel):
    """Complete participants.json file structure."""

    participants: list[ParticipantRecord]

    @field_validator('participants')
    @classmethod
    def validate_unique_names(cls, v):
        """Ensure player names are unique."""
        seen = set()
        for participant in v:
            if participant.player_name in seen:
                raise ValueError(f'Duplicate player name: {participant.player_name}')
            seen.add(participant.player_name)
        return v

    class Config:
        extra = 'forbid'


class SubstanceLogRecord(BaseModel):
    """A logged substance."""

    user_id: str = Field(..., min_length=1)
    substance: str = Field(..., min_length=1)
    date: datetime.date
    points: float

    class Config:
        extra = 'allow'


class LogsFile(BaseModel):
    """Complete substance_logs.json file structure."""

    logs: list[SubstanceLogRecord]

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    current_season: int = Field(1, ge=1)
    clean_sheet_bonus: float = Field(DEFAULT_CLEAN_SHEET_BONUS, le=0)
    substances: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_SUBSTANCE_POINTS))

    @field_validator('substances')
    @classmethod
    def validate_substance_names(cls, v):
        """Ensure every catalog entry has a name."""
        for name in v:
            if not name or not name.strip():
                raise ValueError('Substance names cannot be blank')
        return v

    class Config:
        extra = 'forbid'
