"""Crear tablas del taller: users, clientes, vehiculos, reparaciones, imagenes_reparacion

Revision ID: a1c3e5f7b902
Revises: 
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b902'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.CheckConstraint("role IN ('admin', 'owner')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('clientes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=150), nullable=False),
        sa.Column('cedula', sa.String(length=20), nullable=True),
        sa.Column('telefono', sa.String(length=30), nullable=True),
        sa.Column('email', sa.String(length=150), nullable=True),
        sa.Column('direccion', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cedula')
    )
    op.create_index(op.f('ix_clientes_id'), 'clientes', ['id'], unique=False)

    op.create_table('vehiculos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=False),
        sa.Column('placa', sa.String(length=20), nullable=False),
        sa.Column('marca', sa.String(length=60), nullable=True),
        sa.Column('modelo', sa.String(length=60), nullable=True),
        sa.Column('anio', sa.Integer(), nullable=True),
        sa.Column('vin', sa.String(length=40), nullable=True),
        sa.ForeignKeyConstraint(['cliente_id'], ['clientes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_vehiculos_id'), 'vehiculos', ['id'], unique=False)
    op.create_index(op.f('ix_vehiculos_cliente_id'), 'vehiculos', ['cliente_id'], unique=False)
    op.create_index(op.f('ix_vehiculos_placa'), 'vehiculos', ['placa'], unique=True)

    op.create_table('reparaciones',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('vehiculo_id', sa.Integer(), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=False),
        sa.Column('estado', sa.String(length=20), server_default='pendiente', nullable=False),
        sa.Column('costo_estimado', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('costo_final', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('fecha_ingreso', sa.Date(), server_default=sa.text('CURRENT_DATE'), nullable=False),
        sa.Column('fecha_salida', sa.Date(), nullable=True),
        sa.Column('tecnico', sa.String(length=100), nullable=True),
        sa.Column('tipo_servicio', sa.String(length=100), nullable=True),
        sa.Column('kms', sa.Integer(), nullable=True),
        sa.CheckConstraint("estado IN ('pendiente', 'en_progreso', 'completada', 'cancelada')", name='ck_reparaciones_estado'),
        sa.ForeignKeyConstraint(['vehiculo_id'], ['vehiculos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reparaciones_id'), 'reparaciones', ['id'], unique=False)
    op.create_index(op.f('ix_reparaciones_vehiculo_id'), 'reparaciones', ['vehiculo_id'], unique=False)
    op.create_index(op.f('ix_reparaciones_fecha_ingreso'), 'reparaciones', ['fecha_ingreso'], unique=False)

    op.create_table('imagenes_reparacion',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('reparacion_id', sa.Integer(), nullable=False),
        sa.Column('nombre_archivo', sa.String(length=255), nullable=False),
        sa.Column('tipo_mime', sa.String(length=100), nullable=False),
        sa.Column('tamano_bytes', sa.Integer(), nullable=False),
        sa.Column('datos_base64', sa.Text(), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('creado_en', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['reparacion_id'], ['reparaciones.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_imagenes_reparacion_id'), 'imagenes_reparacion', ['id'], unique=False)
    op.create_index(op.f('ix_imagenes_reparacion_reparacion_id'), 'imagenes_reparacion', ['reparacion_id'], unique=False)


def downgrade() -> None:
    op.drop_table('imagenes_reparacion')
    op.drop_table('reparaciones')
    op.drop_table('vehiculos')
    op.drop_table('clientes')
    op.drop_table('users')
