from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .db import Base


def _new_id() -> str:
    return str(uuid4())


class League(Base):
    __tablename__ = "leagues"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, default="")
    championship = Column(String, nullable=True)
    status = Column(String, nullable=True)

    # Start trigger
    start_condition = Column(String, nullable=True, default="date")  # "date" | "participants"
    start_min_participants = Column(Integer, nullable=True)
    start_at = Column(DateTime(timezone=True), nullable=True)
    signup_deadline = Column(DateTime(timezone=True), nullable=True)
    participants = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    matches = relationship("LeagueMatch", back_populates="league")


class LeagueMatch(Base):
    __tablename__ = "league_matches"
    __table_args__ = (
        UniqueConstraint("league_id", "external_ref", name="uq_league_matches_external_ref"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    league_id = Column(String(36), ForeignKey("leagues.id"), nullable=False, index=True)
    home_team = Column(String, nullable=False, default="")
    away_team = Column(String, nullable=False, default="")
    start_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, nullable=False, default="upcoming")
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    external_ref = Column(String, nullable=True)
    # "metadata" is reserved on declarative classes
    match_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    league = relationship("League", back_populates="matches")
    predictions = relationship("LeaguePrediction", back_populates="match")


class LeaguePrediction(Base):
    __tablename__ = "league_predictions"
    __table_args__ = (
        UniqueConstraint("match_id", "user_id", name="uq_league_predictions_match_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    league_id = Column(String(36), ForeignKey("leagues.id"), nullable=False, index=True)
    match_id = Column(String(36), ForeignKey("league_matches.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    confident = Column(Boolean, nullable=False, default=False)
    points = Column(Float, nullable=True)
    status = Column(String, nullable=False, default="draft")   # draft | submitted
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    match = relationship("LeagueMatch", back_populates="predictions")


class LeagueTransaction(Base):
    __tablename__ = "league_transactions"

    id = Column(Integer, primary_key=True, index=True)
    league_id = Column(String(36), nullable=False, index=True)
    action = Column(String, nullable=False)
    tx_hash = Column(String, nullable=False)
    wallet_address = Column(String, nullable=True)
    chain_id = Column(Integer, nullable=True)
    tx_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AppSettings(Base):
    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True)
    football_data_api_key_enc = Column(Text, nullable=True)
    api_football_api_key_enc = Column(Text, nullable=True)
    updated_at_utc = Column(DateTime(timezone=True), server_default=func.now())
