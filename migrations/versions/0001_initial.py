"""Initial schema: users, rides, payments, platform settings.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Таблица users: пассажиры, водители и администраторы
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(64), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="passenger"),
        sa.Column("vehicle_type", sa.String(32), nullable=True),
        sa.Column("license_plate", sa.String(32), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("earnings", sa.Float, nullable=False, server_default="0"),
        sa.Column("rating", sa.Float, nullable=False, server_default="5"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Таблица rides; version нужен для compare-and-swap при принятии заказа
    op.create_table(
        "rides",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("passenger_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("driver_id", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("pickup_location", sa.Text, nullable=False),
        sa.Column("destination", sa.Text, nullable=False),
        sa.Column("vehicle_type", sa.String(32), nullable=False),
        sa.Column("distance", sa.Float, nullable=False),
        sa.Column("fare", sa.Float, nullable=False),
        sa.Column("eta", sa.Integer, nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("payment_method", sa.String(32), nullable=False, server_default="cash"),
        sa.Column("payment_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("earnings_credited", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_rides_passenger_id", "rides", ["passenger_id"])
    op.create_index("ix_rides_driver_id", "rides", ["driver_id"])

    # Таблица payments
    op.create_table(
        "payments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("ride_id", sa.String(36), sa.ForeignKey("rides.id", ondelete="CASCADE"), nullable=False),
        sa.Column("passenger_id", sa.String(36), nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("method", sa.String(32), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="completed"),
        sa.Column("transaction_id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_payments_ride_id", "payments", ["ride_id"])
    op.create_index("ix_payments_passenger_id", "payments", ["passenger_id"])

    # Единственная строка настроек платформы
    op.create_table(
        "platform_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email_notifications", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("theme", sa.String(32), nullable=False, server_default="gold"),
    )


def downgrade() -> None:
    op.drop_table("platform_settings")
    op.drop_index("ix_payments_passenger_id", table_name="payments")
    op.drop_index("ix_payments_ride_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_rides_driver_id", table_name="rides")
    op.drop_index("ix_rides_passenger_id", table_name="rides")
    op.drop_table("rides")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
