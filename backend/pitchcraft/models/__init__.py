# Import all models so SQLModel.metadata registers them for Alembic autogenerate.
from pitchcraft.models.base import BaseUUIDModel  # noqa: F401
from pitchcraft.models.user import User  # noqa: F401
from pitchcraft.models.refresh_token import RefreshToken  # noqa: F401
from pitchcraft.models.pitch import Pitch  # noqa: F401
