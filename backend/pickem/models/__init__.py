"""Model registration module used by alembic autogeneration."""

from pickem.models.db.match import Match  # noqa: F401
from pickem.models.db.participant import Participant  # noqa: F401
from pickem.models.db.prediction import Prediction  # noqa: F401
from pickem.models.db.tournament import Tournament  # noqa: F401
