"""Create player finance tables."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_finance_tables"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(14, 2)
RATE = sa.Numeric(7, 4)

LOAN_TYPE = sa.Enum(
    "personal",
    "business",
    "investment",
    "emergency",
    name="loan_type",
)
FINANCIAL_EVENT_TYPE = sa.Enum(
    "loan_approved",
    "payment_made",
    "debt_paid_off",
    name="financial_event_type",
)


def upgrade() -> None:
    op.create_table(
        "careers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False, unique=True),
        sa.Column("base_salary", MONEY, nullable=False, server_default="0"),
    )
    op.create_table(
        "career_expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "career_id",
            sa.Integer(),
            sa.ForeignKey("careers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
    )
    op.create_index(
        "ix_career_expenses_career_id", "career_expenses", ["career_id"]
    )
    op.create_table(
        "goals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "assets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("cost", MONEY, nullable=False),
        sa.Column("cash_flow", MONEY, nullable=False, server_default="0"),
    )
    op.create_table(
        "player_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("display_name", sa.String(length=64), nullable=False),
        sa.Column(
            "career_id", sa.Integer(), sa.ForeignKey("careers.id"), nullable=True
        ),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("goals.id"), nullable=True),
        sa.Column("cash", MONEY, nullable=False, server_default="0"),
        sa.Column("savings", MONEY, nullable=False, server_default="0"),
        sa.Column("salary", MONEY, nullable=False, server_default="0"),
        sa.Column("passive_income", MONEY, nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_player_sessions_session_id", "player_sessions", ["session_id"]
    )
    op.create_table(
        "player_assets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "player_id",
            sa.Integer(),
            sa.ForeignKey("player_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "asset_id", sa.Integer(), sa.ForeignKey("assets.id"), nullable=False
        ),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("player_id", "asset_id"),
    )
    op.create_index("ix_player_assets_player_id", "player_assets", ["player_id"])
    op.create_table(
        "session_asset_states",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column(
            "asset_id", sa.Integer(), sa.ForeignKey("assets.id"), nullable=False
        ),
        sa.Column("current_price", MONEY, nullable=False),
        sa.UniqueConstraint("session_id", "asset_id"),
    )
    op.create_index(
        "ix_session_asset_states_session_id", "session_asset_states", ["session_id"]
    )
    op.create_table(
        "player_debts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "player_id",
            sa.Integer(),
            sa.ForeignKey("player_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("loan_type", LOAN_TYPE, nullable=False),
        sa.Column("original_amount", MONEY, nullable=False),
        sa.Column("current_balance", MONEY, nullable=False),
        sa.Column("interest_rate", RATE, nullable=False),
        sa.Column("monthly_payment", MONEY, nullable=False),
        sa.Column("term_months", sa.Integer(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("last_payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "is_paid_off", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "collateral_asset_id",
            sa.Integer(),
            sa.ForeignKey("assets.id"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "current_balance >= 0 AND current_balance <= original_amount",
            name="ck_player_debts_balance_range",
        ),
    )
    op.create_index(
        "ix_player_debts_player_due", "player_debts", ["player_id", "due_date"]
    )
    op.create_table(
        "financial_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "player_id",
            sa.Integer(),
            sa.ForeignKey("player_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("event_type", FINANCIAL_EVENT_TYPE, nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column(
            "debt_id", sa.Integer(), sa.ForeignKey("player_debts.id"), nullable=True
        ),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_financial_events_player_id", "financial_events", ["player_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_financial_events_player_id", table_name="financial_events")
    op.drop_table("financial_events")
    op.drop_index("ix_player_debts_player_due", table_name="player_debts")
    op.drop_table("player_debts")
    op.drop_index(
        "ix_session_asset_states_session_id", table_name="session_asset_states"
    )
    op.drop_table("session_asset_states")
    op.drop_index("ix_player_assets_player_id", table_name="player_assets")
    op.drop_table("player_assets")
    op.drop_index("ix_player_sessions_session_id", table_name="player_sessions")
    op.drop_table("player_sessions")
    op.drop_table("assets")
    op.drop_table("goals")
    op.drop_index("ix_career_expenses_career_id", table_name="career_expenses")
    op.drop_table("career_expenses")
    op.drop_table("careers")
    FINANCIAL_EVENT_TYPE.drop(op.get_bind(), checkfirst=True)
    LOAN_TYPE.drop(op.get_bind(), checkfirst=True)
