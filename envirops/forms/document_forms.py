"""
Forms for quotations, service orders and purchase orders.
Items are submitted as a JSON list and validated through FieldList(FormField(...)).
"""
from wtforms import (
    Form, StringField, TextAreaField, DecimalField, IntegerField, DateField,
    FieldList, FormField,
)
from wtforms.validators import (
    DataRequired, InputRequired, Optional, Length, NumberRange, AnyOf, ValidationError,
)

from envirops.forms.master_forms import DATE_FORMATS, strip_or_none
from envirops.models.enums import (
    Currency, QuotationStatus, ServiceOrderStatus, PurchaseOrderStatus, enum_values,
)


class ItemForm(Form):
    """Document line item."""

    code = StringField('Código', filters=[strip_or_none], validators=[
        DataRequired(message='El código es requerido'), Length(max=64)
    ])
    name = StringField('Nombre', filters=[strip_or_none], validators=[
        DataRequired(message='El nombre es requerido'), Length(max=255)
    ])
    description = TextAreaField('Descripción', filters=[strip_or_none], validators=[Optional()])
    quantity = DecimalField('Cantidad', validators=[
        InputRequired(message='La cantidad es requerida'),
        NumberRange(min=1, message='La cantidad debe ser al menos 1')
    ])
    days = IntegerField('Días', validators=[
        Optional(), NumberRange(min=1, message='Los días deben ser al menos 1')
    ])
    unit_price = DecimalField('Precio unitario', validators=[
        InputRequired(message='El precio unitario es requerido'),
        NumberRange(min=0, message='El precio no puede ser negativo')
    ])


def _currency_field():
    return StringField('Moneda', filters=[strip_or_none], validators=[
        Optional(), AnyOf(enum_values(Currency), message='Moneda inválida')
    ])


def _status_field(enum_cls):
    allowed = enum_values(enum_cls)
    return StringField('Estado', filters=[strip_or_none], validators=[
        Optional(), AnyOf(allowed, message=f"Estado inválido. Valores permitidos: {', '.join(allowed)}")
    ])


class QuotationForm(Form):
    """Quotation (cotización); at least one item is required."""

    not_null_fields = ('number', 'date', 'currency', 'validity_days', 'status', 'consider_days')

    number = StringField('Número', filters=[strip_or_none], validators=[Optional(), Length(max=32)])
    date = DateField('Fecha', format=DATE_FORMATS, validators=[Optional()])
    client_id = IntegerField('Cliente', validators=[InputRequired(message='El cliente es requerido')])
    currency = _currency_field()
    equipment_release_date = DateField('Fecha de salida de equipos', format=DATE_FORMATS, validators=[
        DataRequired(message='La fecha de salida de equipos es requerida')
    ])
    validity_days = IntegerField('Validez (días)', validators=[
        Optional(), NumberRange(min=1, message='La validez debe ser al menos 1 día')
    ])
    status = _status_field(QuotationStatus)
    notes = TextAreaField('Notas', filters=[strip_or_none], validators=[Optional()])
    consider_days = IntegerField('Días considerados', validators=[Optional(), NumberRange(min=1)])
    return_date = DateField('Fecha de retorno', format=DATE_FORMATS, validators=[Optional()])
    monitoring_location = StringField('Lugar de monitoreo', filters=[strip_or_none], validators=[
        Optional(), Length(max=255)
    ])
    credit_line = DecimalField('Línea de crédito', validators=[Optional(), NumberRange(min=0)])
    items = FieldList(FormField(ItemForm), min_entries=0)

    def validate_items(self, field):
        if not field.entries:
            raise ValidationError('La cotización debe tener al menos un ítem')


class OrderForm(Form):
    """Fields shared by service orders and purchase orders."""

    not_null_fields = ('number', 'currency', 'status')

    number = StringField('Número', filters=[strip_or_none], validators=[Optional(), Length(max=32)])
    date = DateField('Fecha', format=DATE_FORMATS, validators=[DataRequired(message='La fecha es requerida')])
    client_id = IntegerField('Cliente', validators=[InputRequired(message='El cliente es requerido')])
    description = TextAreaField('Descripción', filters=[strip_or_none], validators=[Optional()])
    currency = _currency_field()
    payment_terms = StringField('Condiciones de pago', filters=[strip_or_none], validators=[
        Optional(), Length(max=255)
    ])
    gestor_id = IntegerField('Gestor', validators=[InputRequired(message='El gestor es requerido')])
    attendant_name = StringField('Atendido por', filters=[strip_or_none], validators=[
        Optional(), Length(max=200)
    ])
    comments = TextAreaField('Comentarios', filters=[strip_or_none], validators=[Optional()])
    items = FieldList(FormField(ItemForm), min_entries=0)


class ServiceOrderForm(OrderForm):
    """Service order (orden de servicio)."""

    status = _status_field(ServiceOrderStatus)


class PurchaseOrderForm(OrderForm):
    """Purchase order (orden de compra)."""

    status = _status_field(PurchaseOrderStatus)


class StatusForm(Form):
    """Body of the status endpoint; the allowed values depend on the document."""

    status = StringField('Estado', filters=[strip_or_none], validators=[
        DataRequired(message='El estado es requerido')
    ])
