from app.models.user import User, RPSChoice
from app.models.social import Follow
from app.models.game import RPSGame

__all__ = ["User", "RPSChoice", "Follow", "RPSGame"]
