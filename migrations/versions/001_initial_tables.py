"""Create PetVally tables

Revision ID: 001
Revises:
Create Date: 2025-06-01 10:00:00.000000

"""
from typing import List, Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.String(36), nullable=False)


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(10, 2), nullable=nullable)


def _timestamps(updated: bool = True) -> List[sa.Column]:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return columns


def _user_fk(ondelete: str = 'CASCADE') -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete=ondelete)


def _indexes(table: str, *columns: str) -> None:
    for column in columns:
        op.create_index(f'ix_{table}_{column}', table, [column])


def upgrade() -> None:
    """Create every PetVally table."""

    # 1. Accounts
    op.create_table('users',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('area', sa.String(100), nullable=True),
        sa.Column('daily_availability', sa.Integer(), nullable=False),
        sa.Column('has_outdoor_space', sa.Boolean(), nullable=False),
        sa.Column('has_children', sa.Boolean(), nullable=False),
        sa.Column('has_allergies', sa.Boolean(), nullable=False),
        sa.Column('experience_level', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('caregivers',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('area', sa.String(100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=False),
        _money('hourly_rate', nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False),
        _money('total_earnings'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_caregivers'),
    )
    op.create_index('ix_caregivers_email', 'caregivers', ['email'], unique=True)

    op.create_table('admins',
        _id(),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_admins'),
        sa.UniqueConstraint('username', name='uq_admins_username'),
    )

    # 2. Notifications
    op.create_table('notifications',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_notifications'),
    )
    _indexes('notifications', 'user_id')

    # 3. Pet shop
    op.create_table('pets',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('breed', sa.String(255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        _money('price'),
        sa.Column('images', sa.String(500), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('energy_level', sa.Integer(), nullable=False),
        sa.Column('space_required', sa.Integer(), nullable=False),
        sa.Column('maintenance', sa.Integer(), nullable=False),
        sa.Column('child_friendly', sa.Boolean(), nullable=False),
        sa.Column('allergy_safe', sa.Boolean(), nullable=False),
        sa.Column('neutered', sa.Boolean(), nullable=False),
        sa.Column('vaccinated', sa.Boolean(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_pets'),
    )
    _indexes('pets', 'is_available')

    op.create_table('pet_orders',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('pet_id', sa.String(36), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_pet_orders'),
        _user_fk(),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id']),
    )
    _indexes('pet_orders', 'user_id', 'pet_id')

    # 4. Store
    op.create_table('products',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        _money('price'),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('image', sa.String(500), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_products'),
    )
    _indexes('products', 'category')

    op.create_table('product_ratings',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('product_id', sa.String(36), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_product_ratings'),
        _user_fk(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_product_ratings_user_product'),
    )
    _indexes('product_ratings', 'user_id', 'product_id')

    op.create_table('carts',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_carts'),
        _user_fk(),
        sa.UniqueConstraint('user_id', name='uq_carts_user_id'),
    )

    op.create_table('cart_items',
        _id(),
        sa.Column('cart_id', sa.String(36), nullable=False),
        sa.Column('product_id', sa.String(36), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_cart_items'),
        sa.ForeignKeyConstraint(['cart_id'], ['carts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
    )
    _indexes('cart_items', 'cart_id', 'product_id')

    op.create_table('orders',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        _money('total_price'),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('shipping_name', sa.String(255), nullable=False),
        sa.Column('shipping_address', sa.String(500), nullable=False),
        sa.Column('shipping_city', sa.String(100), nullable=False),
        sa.Column('shipping_state', sa.String(100), nullable=False),
        sa.Column('shipping_zip', sa.String(20), nullable=False),
        sa.Column('shipping_country', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_orders'),
        _user_fk(),
    )
    _indexes('orders', 'user_id', 'status')

    op.create_table('order_items',
        _id(),
        sa.Column('order_id', sa.String(36), nullable=False),
        sa.Column('product_id', sa.String(36), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        _money('price'),
        sa.PrimaryKeyConstraint('id', name='pk_order_items'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
    )
    _indexes('order_items', 'order_id', 'product_id')

    # 5. Caregiving
    op.create_table('job_posts',
        _id(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('area', sa.String(100), nullable=False),
        _money('price_range_low'),
        _money('price_range_high'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('selected_caregiver_id', sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_job_posts'),
        _user_fk(),
        sa.ForeignKeyConstraint(['selected_caregiver_id'], ['caregivers.id']),
    )
    _indexes('job_posts', 'city', 'area', 'status', 'user_id', 'selected_caregiver_id')

    op.create_table('job_applications',
        _id(),
        sa.Column('proposal', sa.Text(), nullable=False),
        _money('requested_amount'),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('caregiver_id', sa.String(36), nullable=False),
        sa.Column('job_post_id', sa.String(36), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_job_applications'),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregivers.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_post_id'], ['job_posts.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('caregiver_id', 'job_post_id', name='uq_job_applications_caregiver_job'),
    )
    _indexes('job_applications', 'status', 'caregiver_id', 'job_post_id')

    op.create_table('reviews',
        _id(),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('caregiver_id', sa.String(36), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_reviews'),
        _user_fk(),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregivers.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'caregiver_id', name='uq_reviews_user_caregiver'),
    )
    _indexes('reviews', 'user_id', 'caregiver_id')

    # 6. Community
    for table, extra in (
        ('missing_posts', [sa.Column('status', sa.String(20), nullable=False)]),
        ('donation_posts', [
            sa.Column('gender', sa.String(20), nullable=False),
            sa.Column('vaccinated', sa.Boolean(), nullable=False),
            sa.Column('neutered', sa.Boolean(), nullable=False),
            sa.Column('is_available', sa.Boolean(), nullable=False),
        ]),
    ):
        op.create_table(table,
            _id(),
            sa.Column('title', sa.String(255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('images', sa.String(500), nullable=False),
            sa.Column('country', sa.String(100), nullable=False),
            sa.Column('city', sa.String(100), nullable=False),
            sa.Column('area', sa.String(100), nullable=False),
            sa.Column('species', sa.String(100), nullable=False),
            sa.Column('breed', sa.String(100), nullable=False),
            sa.Column('age', sa.Integer(), nullable=False),
            *extra,
            sa.Column('upvotes_count', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id', name=f'pk_{table}'),
            _user_fk(),
        )
        _indexes(table, 'city', 'area', 'user_id')
    _indexes('missing_posts', 'status')
    _indexes('donation_posts', 'is_available')

    op.create_table('upvotes',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('missing_post_id', sa.String(36), nullable=True),
        sa.Column('donation_post_id', sa.String(36), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_upvotes'),
        _user_fk(),
        sa.ForeignKeyConstraint(['missing_post_id'], ['missing_posts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['donation_post_id'], ['donation_posts.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'missing_post_id', name='uq_upvotes_user_missing_post'),
        sa.UniqueConstraint('user_id', 'donation_post_id', name='uq_upvotes_user_donation_post'),
    )
    _indexes('upvotes', 'user_id', 'missing_post_id', 'donation_post_id')

    op.create_table('comments',
        _id(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('missing_post_id', sa.String(36), nullable=True),
        sa.Column('donation_post_id', sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
        _user_fk(),
        sa.ForeignKeyConstraint(['missing_post_id'], ['missing_posts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['donation_post_id'], ['donation_posts.id'], ondelete='CASCADE'),
    )
    _indexes('comments', 'user_id', 'missing_post_id', 'donation_post_id')

    op.create_table('adoption_forms',
        _id(),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('meeting_schedule', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('donation_post_id', sa.String(36), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_adoption_forms'),
        _user_fk(),
        sa.ForeignKeyConstraint(['donation_post_id'], ['donation_posts.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'donation_post_id', name='uq_adoption_forms_user_donation_post'),
    )
    _indexes('adoption_forms', 'status', 'user_id', 'donation_post_id')

    # 7. Vet care
    op.create_table('vet_doctors',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('specialty', sa.JSON(), nullable=False),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('area', sa.String(100), nullable=True),
        sa.Column('contact', sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_vet_doctors'),
    )
    _indexes('vet_doctors', 'city', 'area')

    op.create_table('appointments',
        _id(),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('vet_id', sa.String(36), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('time', sa.String(50), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_appointments'),
        _user_fk(),
        sa.ForeignKeyConstraint(['vet_id'], ['vet_doctors.id'], ondelete='CASCADE'),
    )
    _indexes('appointments', 'user_id', 'vet_id', 'date')


def downgrade() -> None:
    """Drop every PetVally table, dependents first."""
    for table in (
        'appointments', 'vet_doctors',
        'adoption_forms', 'comments', 'upvotes', 'donation_posts', 'missing_posts',
        'reviews', 'job_applications', 'job_posts',
        'order_items', 'orders', 'cart_items', 'carts', 'product_ratings', 'products',
        'pet_orders', 'pets',
        'notifications',
        'admins', 'caregivers', 'users',
    ):
        op.drop_table(table)
