"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Creates all tables for GoodEats!:
users, auth_sessions, events, rsvps, posts, comments, post_likes, friendships.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("dietary_preferences", sa.JSON, nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- auth_sessions ---
    op.create_table(
        "auth_sessions",
        sa.Column("session_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("host_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("event_type", sa.String(20), nullable=False, server_default="potluck"),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("time", sa.Time, nullable=False),
        sa.Column("duration_hours", sa.Float, nullable=False, server_default="2"),
        sa.Column("timezone", sa.String(50), nullable=False, server_default="UTC"),
        sa.Column("starts_at_utc", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("location_name", sa.String(255), nullable=False),
        sa.Column("location_address", sa.String(500), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("max_attendees", sa.Integer, nullable=False),
        sa.Column("current_attendees", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cover_image", sa.String(500), nullable=True),
        sa.Column("meal_theme", sa.String(255), nullable=True),
        sa.Column("price", sa.Float, nullable=False, server_default="0"),
        sa.Column("is_free", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("dietary_options", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("current_attendees >= 0", name="ck_events_attendees_nonnegative"),
        sa.CheckConstraint("current_attendees <= max_attendees", name="ck_events_within_capacity"),
    )

    # --- rsvps ---
    op.create_table(
        "rsvps",
        sa.Column("rsvp_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False, index=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("guests_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("bringing_dish", sa.String(255), nullable=True),
        sa.Column("dietary_restrictions", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "user_id", name="uq_rsvps_event_user"),
        sa.CheckConstraint("guests_count >= 1", name="ck_rsvps_guests_positive"),
    )

    # --- posts ---
    op.create_table(
        "posts",
        sa.Column("post_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("images", sa.JSON, nullable=True),
        sa.Column("likes_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- comments ---
    op.create_table(
        "comments",
        sa.Column("comment_id", sa.String(36), primary_key=True),
        sa.Column("post_id", sa.String(36), sa.ForeignKey("posts.post_id"), nullable=False, index=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- post_likes ---
    op.create_table(
        "post_likes",
        sa.Column("post_id", sa.String(36), sa.ForeignKey("posts.post_id"), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- friendships ---
    op.create_table(
        "friendships",
        sa.Column("friendship_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("friend_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "friend_id", name="uq_friendships_pair"),
    )


def downgrade() -> None:
    op.drop_table("friendships")
    op.drop_table("post_likes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("rsvps")
    op.drop_table("events")
    op.drop_table("auth_sessions")
    op.drop_table("users")
