"""Initial schema: accounts, master data, catalog, sales and purchase books

Revision ID: 20261001_initial_schema
Revises:
Create Date: 2026-10-01
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _totals_columns():
    """Header amount columns shared by sales and purchase documents."""
    return [
        sa.Column('items_total', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('freight', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('total_taxable_value', sa.Numeric(14, 2), nullable=False),
        sa.Column('taxrate', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('total_cgst', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('total_sgst', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('total_igst', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('total_tax', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('total', sa.Numeric(14, 2), nullable=False),
    ]


def _line_columns():
    """Line columns shared by sales and purchase items."""
    return [
        sa.Column('product_id', sa.Integer,
                  sa.ForeignKey('products.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('qty', sa.Integer, nullable=False),
        sa.Column('rate', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('subtotal', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('hsn', sa.String(20), nullable=True),
        sa.Column('part', sa.String(100), nullable=True),
        sa.Column('category_id', sa.Integer, nullable=True),
        sa.Column('model_id', sa.Integer, nullable=True),
        sa.Column('company_id', sa.Integer, nullable=True),
        sa.Column('invoice_date', sa.Integer, nullable=False),
        sa.Column('fy', sa.Integer, nullable=True),
    ]


def _party_columns():
    """Bill-to / ship-to party columns."""
    return [
        sa.Column('user_name', sa.String(255), nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('gstin', sa.String(20), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('state_code', sa.String(5), nullable=True),
        sa.Column('contact_no', sa.String(20), nullable=True),
    ]


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(255), unique=True, nullable=False, index=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('auth_key', sa.String(32), nullable=False),
        sa.Column('password_reset_token', sa.String(255), nullable=True),
        sa.Column('status', sa.Integer, nullable=False, server_default='10',
                  comment='10 = active, 0 = inactive'),
        sa.Column('created_at', sa.Integer, nullable=False),
        sa.Column('updated_at', sa.Integer, nullable=False),
    )

    # Master data
    op.create_table(
        'states',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('state_name', sa.String(100), nullable=False, index=True),
        sa.Column('code', sa.Integer, nullable=False, server_default='0',
                  comment='GST state code'),
    )
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('billing_name', sa.String(255), nullable=False, index=True),
        sa.Column('billing_address', sa.Text, nullable=True),
        sa.Column('billing_state_id', sa.Integer,
                  sa.ForeignKey('states.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('billing_state_code', sa.Integer, nullable=True),
        sa.Column('billing_gstin', sa.String(20), nullable=True),
        sa.Column('contact_no', sa.String(20), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('shipping_name', sa.String(255), nullable=True),
        sa.Column('shipping_address', sa.Text, nullable=True),
        sa.Column('shipping_state_id', sa.Integer,
                  sa.ForeignKey('states.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('shipping_state_code', sa.Integer, nullable=True),
        sa.Column('shipping_gstin', sa.String(20), nullable=True),
    )
    op.create_table(
        'vendors',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('vendor_name', sa.String(255), nullable=False, index=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('address_2', sa.Text, nullable=True),
        sa.Column('state_id', sa.Integer,
                  sa.ForeignKey('states.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('state_code', sa.Integer, nullable=True),
        sa.Column('contact_no', sa.String(20), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('tax_id', sa.String(20), nullable=True, comment='GSTIN'),
    )

    # Catalog lookups
    for table, column in (
        ('product_categories', 'category_name'),
        ('product_subcategories', 'subcategory_name'),
        ('product_companies', 'company_name'),
        ('car_models', 'model_name'),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
            sa.Column(column, sa.String(150), nullable=False, index=True),
        )

    op.create_table(
        'products',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('product_name', sa.String(255), nullable=False, index=True),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('part_no', sa.String(100), nullable=True, index=True),
        sa.Column('product_category_id', sa.Integer,
                  sa.ForeignKey('product_categories.id', ondelete='SET NULL'),
                  nullable=True, index=True),
        sa.Column('product_subcategory_id', sa.Integer,
                  sa.ForeignKey('product_subcategories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('car_model_ids', sa.String(500), nullable=True,
                  comment='Comma-separated car_models ids'),
        sa.Column('company_id', sa.Integer,
                  sa.ForeignKey('product_companies.id', ondelete='SET NULL'), nullable=True),
        sa.Column('stock', sa.Integer, nullable=False, server_default='0'),
        sa.Column('min_stock', sa.Integer, nullable=True),
        sa.Column('rate', sa.Numeric(14, 2), nullable=True),
        sa.Column('hsn', sa.String(20), nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        *_timestamps(),
    )

    # Sales book
    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_no', sa.String(50), unique=True, nullable=False, index=True),
        sa.Column('invoice_date', sa.Integer, nullable=False, index=True, comment='Epoch seconds'),
        sa.Column('select_customer', sa.Integer,
                  sa.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True),
        *_totals_columns(),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('fy', sa.Integer, nullable=True, index=True),
        sa.Column('status', sa.Integer, nullable=False, server_default='1'),
        sa.Column('payment_mode', sa.Integer, nullable=False, server_default='1'),
        sa.Column('mode', sa.Integer, nullable=False, server_default='0'),
        sa.Column('type', sa.String(20), nullable=False, server_default='sale'),
        *_timestamps(),
    )

    op.create_table(
        'invoice_billing_details',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('invoices.id', ondelete='CASCADE'), unique=True, nullable=False),
        *_party_columns(),
        sa.Column('email', sa.String(255), nullable=True),
    )
    op.create_table(
        'invoice_shipping_details',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('invoices.id', ondelete='CASCADE'), unique=True, nullable=False),
        *_party_columns(),
        sa.Column('email', sa.String(255), nullable=True),
    )
    op.create_table(
        'invoice_transport_details',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('invoices.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('transporter_name', sa.String(200), nullable=True),
        sa.Column('transporter_gstin', sa.String(15), nullable=True),
        sa.Column('transport_mode', sa.String(20), nullable=True),
        sa.Column('vehicle_number', sa.String(20), nullable=True),
        sa.Column('transport_doc_number', sa.String(50), nullable=True),
        sa.Column('transport_doc_date', sa.String(20), nullable=True),
        sa.Column('place_of_supply', sa.String(100), nullable=True),
        sa.Column('eway_bill_number', sa.String(20), nullable=True),
    )
    op.create_table(
        'invoice_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False, index=True),
        *_line_columns(),
    )

    # Secondary sales book (read-only here)
    op.create_table(
        'salex_invoices',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_no', sa.String(50), nullable=False, index=True),
        sa.Column('invoice_date', sa.Integer, nullable=False, index=True),
        sa.Column('select_customer', sa.Integer,
                  sa.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True),
        *_totals_columns(),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('fy', sa.Integer, nullable=True, index=True),
        sa.Column('status', sa.Integer, nullable=False, server_default='1'),
        sa.Column('payment_mode', sa.Integer, nullable=False, server_default='1'),
        sa.Column('mode', sa.Integer, nullable=False, server_default='0'),
        sa.Column('type', sa.String(20), nullable=False, server_default='salex'),
    )
    op.create_table(
        'salex_billing_details',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('salex_invoices.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('user_name', sa.String(255), nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('gstin', sa.String(20), nullable=True),
        sa.Column('contact_no', sa.String(20), nullable=True),
    )
    op.create_table(
        'salex_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer,
                  sa.ForeignKey('salex_invoices.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('product_id', sa.Integer,
                  sa.ForeignKey('products.id', ondelete='SET NULL'), nullable=True),
        sa.Column('qty', sa.Integer, nullable=False),
        sa.Column('rate', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('subtotal', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('hsn', sa.String(20), nullable=True),
    )

    # Purchase book
    op.create_table(
        'purchases',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('invoice_no', sa.Integer, unique=True, nullable=False, index=True),
        sa.Column('invoice_date', sa.Integer, nullable=False, index=True),
        sa.Column('vendor_id', sa.Integer,
                  sa.ForeignKey('vendors.id', ondelete='SET NULL'), nullable=True, index=True),
        *_totals_columns(),
        sa.Column('bill_reference', sa.String(100), nullable=True),
        sa.Column('staff_details', sa.String(255), nullable=True),
        sa.Column('descriptions', sa.Text, nullable=True),
        sa.Column('transport', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('fy', sa.Integer, nullable=True, index=True),
        sa.Column('status', sa.Integer, nullable=True, server_default='1'),
        sa.Column('payment_mode', sa.Integer, nullable=True, server_default='1'),
        sa.Column('type', sa.String(20), nullable=False, server_default='purchase'),
        *_timestamps(),
    )
    op.create_table(
        'purchase_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('purchase_id', sa.Integer,
                  sa.ForeignKey('purchases.id', ondelete='CASCADE'), nullable=False, index=True),
        *_line_columns(),
    )


def downgrade() -> None:
    for table in (
        'purchase_items', 'purchases',
        'salex_items', 'salex_billing_details', 'salex_invoices',
        'invoice_items', 'invoice_transport_details', 'invoice_shipping_details',
        'invoice_billing_details', 'invoices',
        'products', 'car_models', 'product_companies', 'product_subcategories',
        'product_categories', 'vendors', 'customers', 'states', 'users',
    ):
        op.drop_table(table)
