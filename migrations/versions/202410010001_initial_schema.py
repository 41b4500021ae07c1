"""Initial database schema for the fitness service."""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "202410010001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp_columns():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            server_onupdate=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def _user_fk():
    return sa.Column(
        "user_id",
        sa.String(length=64),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        *_timestamp_columns(),
    )

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.CheckConstraint("duration IS NULL OR duration >= 0", name="ck_workouts_duration"),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"])

    op.create_table(
        "nutrition_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("meal_type", sa.String(length=20), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index("ix_nutrition_logs_user_id", "nutrition_logs", ["user_id"])

    op.create_table(
        "nutrition_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "log_id",
            sa.Integer(),
            sa.ForeignKey("nutrition_logs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("calories", sa.Float(), nullable=False, server_default="0"),
        sa.Column("protein", sa.Float(), nullable=False, server_default="0"),
        sa.Column("carbs", sa.Float(), nullable=False, server_default="0"),
        sa.Column("fat", sa.Float(), nullable=False, server_default="0"),
    )
    op.create_index("ix_nutrition_items_log_id", "nutrition_items", ["log_id"])

    op.create_table(
        "recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="normal"),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
    )
    op.create_index("ix_recommendations_user_id", "recommendations", ["user_id"])
    op.create_index(
        "ix_recommendations_user_id_is_read", "recommendations", ["user_id", "is_read"]
    )


def downgrade() -> None:
    op.drop_index("ix_recommendations_user_id_is_read", table_name="recommendations")
    op.drop_index("ix_recommendations_user_id", table_name="recommendations")
    op.drop_table("recommendations")
    op.drop_index("ix_nutrition_items_log_id", table_name="nutrition_items")
    op.drop_table("nutrition_items")
    op.drop_index("ix_nutrition_logs_user_id", table_name="nutrition_logs")
    op.drop_table("nutrition_logs")
    op.drop_index("ix_workouts_user_id", table_name="workouts")
    op.drop_table("workouts")
    op.drop_table("users")
