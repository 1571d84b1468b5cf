"""
Forms for master data: clients, equipment, staff users and the service catalog.
"""
from wtforms import (
    Form, Field, StringField, TextAreaField, DecimalField, IntegerField,
    DateField, BooleanField, PasswordField,
)
from wtforms.validators import (
    DataRequired, InputRequired, Optional, Length, NumberRange, Regexp, AnyOf,
    ValidationError,
)

from envirops.models.enums import EquipmentStatus, PaymentMethod, enum_values

DATE_FORMATS = ['%Y-%m-%d', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M:%S.%fZ']
EMAIL_RE = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


def strip_or_none(value):
    """Trim strings; blank strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class MappingField(Field):
    """Free-form JSON object (name -> description), supplied through form ``data``."""

    def process_formdata(self, valuelist):
        if valuelist:
            raise ValueError('Debe ser un objeto JSON')

    def pre_validate(self, form):
        if self.data is None:
            return
        if not isinstance(self.data, dict):
            raise ValidationError('Debe ser un objeto JSON')
        for key, value in self.data.items():
            if not isinstance(value, (str, int, float)) or isinstance(value, bool):
                raise ValidationError(f'Valor inválido para el componente "{key}"')


class ClientForm(Form):
    """Client (cliente)."""

    name = StringField('Nombre', filters=[strip_or_none], validators=[
        DataRequired(message='El nombre es requerido'), Length(max=200)
    ])
    ruc = StringField('RUC', filters=[strip_or_none], validators=[
        DataRequired(message='El RUC es requerido'),
        Length(min=11, max=20, message='El RUC debe tener al menos 11 caracteres')
    ])
    address = StringField('Dirección', filters=[strip_or_none], validators=[
        DataRequired(message='La dirección es requerida')
    ])
    email = StringField('Email', filters=[strip_or_none], validators=[
        DataRequired(message='El email es requerido'),
        Regexp(EMAIL_RE, message='Email inválido'),
        Length(max=255)
    ])
    contact_person = StringField('Contacto', filters=[strip_or_none], validators=[Optional(), Length(max=200)])
    credit_line = DecimalField('Línea de crédito', validators=[
        Optional(), NumberRange(min=0, message='La línea de crédito no puede ser negativa')
    ])
    payment_method = StringField('Método de pago', filters=[strip_or_none], validators=[
        Optional(), AnyOf(enum_values(PaymentMethod), message='Método de pago inválido')
    ])
    start_date = DateField('Fecha de inicio', format=DATE_FORMATS, validators=[Optional()])


class EquipmentForm(Form):
    """Monitoring equipment."""

    not_null_fields = ('components', 'status')

    name = StringField('Nombre', filters=[strip_or_none], validators=[
        DataRequired(message='El nombre es requerido'), Length(max=200)
    ])
    type = StringField('Tipo', filters=[strip_or_none], validators=[
        DataRequired(message='El tipo es requerido'), Length(max=100)
    ])
    code = StringField('Código', filters=[strip_or_none], validators=[
        DataRequired(message='El código es requerido'), Length(max=64)
    ])
    description = TextAreaField('Descripción', filters=[strip_or_none], validators=[
        DataRequired(message='La descripción es requerida')
    ])
    components = MappingField('Componentes')
    status = StringField('Estado', filters=[strip_or_none], validators=[
        Optional(), AnyOf(enum_values(EquipmentStatus), message='Estado inválido')
    ])
    is_calibrated = BooleanField('Calibrado')
    calibration_date = DateField('Fecha de calibración', format=DATE_FORMATS, validators=[Optional()])
    serial_number = StringField('N° de serie', filters=[strip_or_none], validators=[Optional(), Length(max=100)])
    observations = TextAreaField('Observaciones', filters=[strip_or_none], validators=[Optional()])


class UserForm(Form):
    """Staff user."""

    name = StringField('Nombre', filters=[strip_or_none], validators=[
        DataRequired(message='El nombre es requerido'), Length(max=200)
    ])
    email = StringField('Email', filters=[strip_or_none], validators=[
        DataRequired(message='El email es requerido'),
        Regexp(EMAIL_RE, message='Email inválido'),
        Length(max=255)
    ])
    password = PasswordField('Contraseña', validators=[
        Optional(), Length(min=6, message='La contraseña debe tener al menos 6 caracteres')
    ])
    position = StringField('Cargo', filters=[strip_or_none], validators=[Optional(), Length(max=100)])
    department = StringField('Área', filters=[strip_or_none], validators=[Optional(), Length(max=100)])
    role = StringField('Rol', filters=[strip_or_none], validators=[Optional(), Length(max=50)])


class ServiceForm(Form):
    """Catalog service."""

    not_null_fields = ('default_quantity', 'default_days')

    code = StringField('Código', filters=[strip_or_none], validators=[
        DataRequired(message='El código es requerido'), Length(max=64)
    ])
    name = StringField('Nombre', filters=[strip_or_none], validators=[
        DataRequired(message='El nombre es requerido'), Length(max=255)
    ])
    description = TextAreaField('Descripción', filters=[strip_or_none], validators=[Optional()])
    unit_price = DecimalField('Precio unitario', validators=[
        InputRequired(message='El precio unitario es requerido'),
        NumberRange(min=0, message='El precio no puede ser negativo')
    ])
    default_quantity = DecimalField('Cantidad por defecto', validators=[Optional(), NumberRange(min=1)])
    default_days = IntegerField('Días por defecto', validators=[Optional(), NumberRange(min=1)])
