"""initial meditime schema

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-19 20:45:12.503118
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f2a9c1d7e40'
down_revision = None
branch_labels = None
depends_on = None

level = ('NONE', 'LOW', 'MEDIUM', 'HIGH')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=80), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'medicines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('generic_name', sa.String(length=255), nullable=True),
        sa.Column('ingredients', sa.Text(), nullable=True),
        sa.Column('company', sa.String(length=255), nullable=True),
        sa.Column('class_name', sa.String(length=255), nullable=True),
        sa.Column('effect', sa.String(length=500), nullable=True),
        sa.Column('usage', sa.String(length=500), nullable=True),
        sa.Column('side_effects', sa.String(length=500), nullable=True),
        sa.Column('precautions', sa.String(length=500), nullable=True),
        sa.Column('sleep_inducing', sa.Enum(*level, name='sleepinducing'), nullable=False),
        sa.Column('alertness_effect', sa.Enum(*level, name='alertnesseffect'), nullable=False),
        sa.Column('stomach_irritation', sa.Boolean(), nullable=False),
        sa.Column('meal_timing', sa.Enum('BEFORE_MEAL', 'AFTER_MEAL', 'WITH_MEAL', 'ANYTIME', name='mealtiming'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_medicines_name', 'medicines', ['name'], unique=True)
    op.create_index('ix_medicines_generic_name', 'medicines', ['generic_name'], unique=False)

    op.create_table(
        'life_patterns',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('wake_up_time', sa.String(length=5), nullable=False),
        sa.Column('bed_time', sa.String(length=5), nullable=False),
        sa.Column('breakfast_time', sa.String(length=5), nullable=True),
        sa.Column('lunch_time', sa.String(length=5), nullable=True),
        sa.Column('dinner_time', sa.String(length=5), nullable=True),
        sa.Column('work_start_time', sa.String(length=5), nullable=True),
        sa.Column('work_end_time', sa.String(length=5), nullable=True),
        sa.Column('has_driving', sa.Boolean(), nullable=False),
        sa.Column('has_focus_work', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table(
        'user_medicines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('medicine_id', sa.Integer(), nullable=False),
        sa.Column('dosage', sa.String(length=60), nullable=False),
        sa.Column('frequency', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('recommended_times', sa.Text(), nullable=True),   # JSON list of "HH:MM"
        sa.Column('status', sa.Enum('ACTIVE', 'REMOVED', name='medicinestatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medicine_id'], ['medicines.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_user_medicines_user_id', 'user_medicines', ['user_id'], unique=False)
    op.create_index('ix_user_medicines_medicine_id', 'user_medicines', ['medicine_id'], unique=False)
    op.create_index('ix_user_medicine_status', 'user_medicines', ['user_id', 'status'], unique=False)

    op.create_table(
        'drug_interactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('medicine_a_id', sa.Integer(), nullable=False),
        sa.Column('medicine_b_id', sa.Integer(), nullable=False),
        sa.Column('severity_level', sa.Enum('SEVERE', 'MODERATE', 'MILD', name='severitylevel'), nullable=False),
        sa.Column('interaction_type', sa.Enum('EFFECT_INCREASE', 'EFFECT_DECREASE', 'SIDE_EFFECT_INCREASE', 'ABSORPTION_CHANGE', name='interactiontype'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('recommendation', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['medicine_a_id'], ['medicines.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medicine_b_id'], ['medicines.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('medicine_a_id', 'medicine_b_id', name='uq_drug_interaction_pair')
    )
    op.create_index('ix_drug_interactions_medicine_a_id', 'drug_interactions', ['medicine_a_id'], unique=False)
    op.create_index('ix_drug_interactions_medicine_b_id', 'drug_interactions', ['medicine_b_id'], unique=False)


def downgrade():
    op.drop_table('drug_interactions')
    op.drop_table('user_medicines')
    op.drop_table('life_patterns')
    op.drop_table('medicines')
    op.drop_table('users')
    for name in ('interactiontype', 'severitylevel', 'medicinestatus', 'mealtiming',
                 'alertnesseffect', 'sleepinducing'):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
