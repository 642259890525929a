from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint, func
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import JSON, BigInteger, Boolean, DateTime, Enum, Text

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("email", String, nullable=False, unique=True),
    Column("username", String, nullable=False),
    Column("avatar_url", String, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
)

tournaments = Table(
    "tournaments",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, index=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column("admin_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column(
        "status",
        Enum(
            "DRAFT",
            "ACTIVE",
            "COMPLETED",
            name="tournament_status",
        ),
        nullable=False,
        server_default="DRAFT",
        index=True,
    ),
    Column(
        "format",
        Enum(
            "LEAGUE",
            "SWISS",
            "SINGLE_ELIMINATION",
            "DOUBLE_ELIMINATION",
            name="tournament_format",
        ),
        nullable=False,
        server_default="LEAGUE",
    ),
    Column("invite_code", String, nullable=False, unique=True),
    Column("teams", JSON, nullable=False, server_default="[]"),
    Column("scoring_rules", JSON, nullable=False),
    Column("home_and_away", Boolean, nullable=False, server_default="f"),
)

matches = Table(
    "matches",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    Column(
        "tournament_id",
        BigInteger,
        ForeignKey("tournaments.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column("round", Integer, nullable=False, server_default="1"),
    Column("team_a", String, nullable=False),
    Column("team_b", String, nullable=False),
    Column(
        "match_format",
        Enum("BO1", "BO3", "BO5", "BO7", name="match_format"),
        nullable=False,
        server_default="BO1",
    ),
    Column("start_time", DateTimeTZ, nullable=True, index=True),
    Column("locked_at", DateTimeTZ, nullable=True),
    Column("played_at", DateTimeTZ, nullable=True, index=True),
    Column("result", JSON, nullable=True),
    Column("is_bye", Boolean, nullable=False, server_default="f"),
)

participants = Table(
    "participants",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column(
        "tournament_id",
        BigInteger,
        ForeignKey("tournaments.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("total_points", Integer, nullable=True, server_default="0"),
    Column("bonus_points", Integer, nullable=False, server_default="0"),
    Column("rank", Integer, nullable=True),
    Column("joined_at", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("tournament_id", "user_id", name="participants_tournament_id_user_id_key"),
)

predictions = Table(
    "predictions",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column("match_id", BigInteger, ForeignKey("matches.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False),
    Column("predicted_winner", String, nullable=False),
    Column("predicted_score", Text, nullable=False),
    Column("points_earned", Integer, nullable=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now()),
    UniqueConstraint("match_id", "user_id", name="predictions_match_id_user_id_key"),
)
