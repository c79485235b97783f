"""initial prep insights schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19

Creates:
- ingredients catalogue
- recipes and recipe_ingredients (baseline quantities)
- preps and prep_ingredients (actual usage + added/kept/modified status)
- prep_ratings, rating_dimensions
- recipe_insights (one aggregated row per recipe)
"""
from alembic import op
import sqlalchemy as sa

revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None

UNIT = sa.Enum('WHOLE', 'GRAM', 'KILOGRAM', 'MILLILITER', name='unit')
PREP_INGREDIENT_STATUS = sa.Enum('ADDED', 'KEPT', 'MODIFIED', name='prepingredientstatus')


def upgrade() -> None:
    op.create_table(
        'ingredients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('normalized_name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('normalized_name'),
    )
    op.create_index('idx_ingredients_normalized_name', 'ingredients', ['normalized_name'])

    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('prep_time_minutes', sa.Integer(), nullable=False),
        sa.Column('cook_time_minutes', sa.Integer(), nullable=False),
        sa.Column('yield_text', sa.String(100), nullable=True),
        sa.Column('steps', sa.JSON(), nullable=False),
        sa.Column('original_recipe_id', sa.Integer(), nullable=True),
        sa.Column('is_favorite_variant', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['original_recipe_id'], ['recipes.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_recipes_user_id', 'recipes', ['user_id'])
    op.create_index('idx_recipes_original_recipe_id', 'recipes', ['original_recipe_id'])

    op.create_table(
        'recipe_ingredients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(18, 2), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('recipe_id', 'ingredient_id', name='uq_recipe_ingredient'),
    )
    op.create_index('idx_recipe_ingredients_recipe_id', 'recipe_ingredients', ['recipe_id'])

    op.create_table(
        'preps',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('summary_notes', sa.Text(), nullable=True),
        sa.Column('prep_time_minutes', sa.Integer(), nullable=True),
        sa.Column('cook_time_minutes', sa.Integer(), nullable=True),
        sa.Column('steps', sa.JSON(), nullable=False),
        sa.Column('change_summary', sa.Text(), nullable=True),
        sa.Column('created_new_recipe_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_new_recipe_id'], ['recipes.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_preps_recipe_id', 'preps', ['recipe_id'])
    op.create_index('idx_preps_user_id', 'preps', ['user_id'])

    op.create_table(
        'prep_ingredients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prep_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(18, 2), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.Column('status', PREP_INGREDIENT_STATUS, nullable=False),
        sa.ForeignKeyConstraint(['prep_id'], ['preps.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_prep_ingredients_prep_id', 'prep_ingredients', ['prep_id'])
    op.create_index('idx_prep_ingredients_ingredient_id', 'prep_ingredients', ['ingredient_id'])

    op.create_table(
        'prep_ratings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prep_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('liked', sa.Boolean(), nullable=False),
        sa.Column('overall_rating', sa.Integer(), nullable=False),
        sa.Column('dimensions', sa.JSON(), nullable=False),
        sa.Column('what_worked_well', sa.Text(), nullable=True),
        sa.Column('what_to_change', sa.Text(), nullable=True),
        sa.Column('additional_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['prep_id'], ['preps.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('prep_id', 'user_id', name='uq_prep_rating_user'),
    )
    op.create_index(op.f('ix_prep_ratings_id'), 'prep_ratings', ['id'])
    op.create_index('idx_prep_ratings_prep_id', 'prep_ratings', ['prep_id'])

    op.create_table(
        'rating_dimensions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(50), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )

    op.create_table(
        'recipe_insights',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('average_overall_rating', sa.Float(), nullable=False),
        sa.Column('total_ratings', sa.Integer(), nullable=False),
        sa.Column('total_preparations', sa.Integer(), nullable=False),
        sa.Column('dimension_averages', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('recipe_id'),
    )


def downgrade() -> None:
    op.drop_table('recipe_insights')
    op.drop_table('rating_dimensions')
    op.drop_index('idx_prep_ratings_prep_id', table_name='prep_ratings')
    op.drop_index(op.f('ix_prep_ratings_id'), table_name='prep_ratings')
    op.drop_table('prep_ratings')
    op.drop_index('idx_prep_ingredients_ingredient_id', table_name='prep_ingredients')
    op.drop_index('idx_prep_ingredients_prep_id', table_name='prep_ingredients')
    op.drop_table('prep_ingredients')
    op.drop_index('idx_preps_user_id', table_name='preps')
    op.drop_index('idx_preps_recipe_id', table_name='preps')
    op.drop_table('preps')
    op.drop_index('idx_recipe_ingredients_recipe_id', table_name='recipe_ingredients')
    op.drop_table('recipe_ingredients')
    op.drop_index('idx_recipes_original_recipe_id', table_name='recipes')
    op.drop_index('idx_recipes_user_id', table_name='recipes')
    op.drop_table('recipes')
    op.drop_index('idx_ingredients_normalized_name', table_name='ingredients')
    op.drop_table('ingredients')

    PREP_INGREDIENT_STATUS.drop(op.get_bind(), checkfirst=True)
    UNIT.drop(op.get_bind(), checkfirst=True)
