"""Friends list: read-only view over accepted friendships."""
from sqlalchemy import or_
from sqlalchemy.orm import Session

from goodeats.models.friendship import Friendship, FriendshipStatus
from goodeats.models.user import User


def list_friends(db: Session, user_id: str) -> list[User]:
    """Accepted friends of ``user_id``, whichever side created the friendship."""
    edges = (
        db.query(Friendship)
        .filter(
            or_(Friendship.user_id == user_id, Friendship.friend_id == user_id),
            Friendship.status == FriendshipStatus.accepted,
        )
        .all()
    )
    friend_ids = {e.friend_id if e.user_id == user_id else e.user_id for e in edges}
    if not friend_ids:
        return []
    return db.query(User).filter(User.user_id.in_(friend_ids)).order_by(User.username).all()
