"""
Response serializers — upstream dicts → console view models.

Output formatting only: status values become badges from the registry,
money and dates are formatted for display, empty lists become an
empty-state placeholder. No parsing or validation happens here.
"""

from .formatters import format_currency, format_datetime
from .orders import order_total, parse_order_items
from .statuses import describe, get_workflow

COLUMNS = {
    "ticket": [
        ("id", "#"), ("title", "Título"), ("category", "Categoria"),
        ("priority", "Prioridade"), ("status", "Status"), ("created_at", "Criado em"),
    ],
    "prescription": [
        ("patient_name", "Paciente"), ("doctor_name", "Médico"), ("product", "Produto"),
        ("status", "Status"), ("created_at", "Data"),
    ],
    "order": [
        ("order_number", "Pedido"), ("customer_name", "Cliente"), ("total", "Total"),
        ("status", "Status"), ("created_at", "Data"),
    ],
    "sample": [
        ("code", "Código"), ("description", "Descrição"), ("priority", "Prioridade"),
        ("status", "Status"), ("due_date", "Prazo"),
    ],
    "module": [
        ("name", "Módulo"), ("description", "Descrição"), ("activation", "Situação"),
    ],
    "financial_event": [
        ("title", "Título"), ("date", "Data"), ("category", "Categoria"),
        ("amount", "Valor"), ("status", "Status"),
    ],
}

EMPTY_STATES = {
    "ticket":          ("ticket", "Nenhum ticket encontrado"),
    "prescription":    ("file-text", "Nenhuma prescrição encontrada"),
    "order":           ("package", "Nenhum pedido encontrado"),
    "sample":          ("flask-conical", "Nenhuma amostra encontrada"),
    "module":          ("puzzle", "Nenhum módulo encontrado"),
    "financial_event": ("calendar", "Nenhum evento financeiro encontrado"),
}


def _transitions(entity_type, value):
    return [describe(entity_type, t).as_dict() for t in get_workflow(entity_type).allowed_targets(value)]


def empty_state(entity_type, filtered=False):
    icon, text = EMPTY_STATES.get(entity_type, ("inbox", "Nenhum registro encontrado"))
    return {
        'icon': icon,
        'text': text,
        'hint': 'Ajuste os filtros de busca.' if filtered else '',
        # nothing upstream yet: the front-end offers to reload
        'retry': not filtered,
    }


def serialize_listing(entity_type, rows, row_serializer, filtered=False):
    """{count, columns, rows} or {count: 0, empty_state} — never headers alone."""
    if not rows:
        return {
            'count': 0,
            'empty_state': empty_state(entity_type, filtered),
        }
    return {
        'count': len(rows),
        'columns': [{'key': key, 'label': label} for key, label in COLUMNS[entity_type]],
        'rows': [row_serializer(row) for row in rows],
    }


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def serialize_ticket_row(ticket):
    return {
        'id': ticket.get('id'),
        'title': ticket.get('title', ''),
        'category': ticket.get('category', ''),
        'status': describe('ticket', ticket.get('status')).as_dict(),
        'priority': describe('ticket_priority', ticket.get('priority')).as_dict(),
        'assigned_to_id': ticket.get('assignedToId'),
        'created_at': format_datetime(ticket.get('createdAt')),
        'transitions': _transitions('ticket', ticket.get('status')),
    }


def serialize_ticket_detail(detail):
    ticket = detail['ticket']
    row = serialize_ticket_row(ticket)
    row.update({
        'description': ticket.get('description', ''),
        'organization_id': ticket.get('organizationId'),
        'created_by_id': ticket.get('createdById'),
        'updated_at': format_datetime(ticket.get('updatedAt')),
        'resolved_at': format_datetime(ticket.get('resolvedAt')) if ticket.get('resolvedAt') else None,
        'closed_at': format_datetime(ticket.get('closedAt')) if ticket.get('closedAt') else None,
    })
    return {
        'ticket': row,
        'comments': [
            {
                'id': c.get('id'),
                'content': c.get('content', ''),
                'is_internal': bool(c.get('isInternal')),
                'author': c.get('userName') or c.get('userId'),
                'created_at': format_datetime(c.get('createdAt')),
            }
            for c in detail['comments']
        ],
        'attachments': detail['attachments'],
    }


def serialize_prescription_row(prescription):
    return {
        'id': prescription.get('id'),
        'patient_name': prescription.get('patientName', ''),
        'doctor_name': prescription.get('doctorName', ''),
        'product': prescription.get('product', ''),
        'dosage': prescription.get('dosage', ''),
        'status': describe('prescription', prescription.get('status')).as_dict(),
        'notes': prescription.get('notes') or '',
        'created_at': format_datetime(prescription.get('createdAt')),
        'reviewable': prescription.get('status') == 'pending',
    }


def serialize_order_row(order):
    return {
        'id': order.get('id'),
        'order_number': order.get('orderNumber', ''),
        'customer_name': order.get('customerName', ''),
        'total': format_currency(order.get('total')),
        'status': describe('order', order.get('status')).as_dict(),
        'created_at': format_datetime(order.get('createdAt')),
        'transitions': _transitions('order', order.get('status')),
    }


def serialize_order_detail(order):
    items = parse_order_items(order.get('items'))
    response = serialize_order_row(order)
    response.update({
        'items': [item.as_dict() for item in items],
        'items_total': format_currency(order_total(items)),
        'additional_info': order.get('additionalInfo') or {},
    })
    return response


def serialize_sample_row(sample):
    return {
        'id': sample.get('id'),
        'code': sample.get('code', ''),
        'description': sample.get('description', ''),
        'test_types': sample.get('testTypes') or [],
        'status': describe('sample', sample.get('status')).as_dict(),
        'priority': describe('sample_priority', sample.get('priority')).as_dict(),
        'due_date': format_datetime(sample.get('dueDate')),
        'assigned_to': sample.get('assignedTo'),
        'transitions': _transitions('sample', sample.get('status')),
    }


def serialize_module_row(module):
    return {
        'id': module.get('id'),
        'name': module.get('name', ''),
        'description': module.get('description', ''),
        'activation': describe('module', module.get('activation')).as_dict(),
        'is_active': bool(module.get('isActive')),
    }


def serialize_financial_event_row(event):
    return {
        'id': event.get('id'),
        'title': event.get('title', ''),
        'date': format_datetime(event.get('date')),
        'type': event.get('type', ''),
        'category': event.get('category', ''),
        'amount': format_currency(event.get('amount')),
        'status': describe('financial_event', event.get('status')).as_dict(),
        'description': event.get('description', ''),
        'transitions': _transitions('financial_event', event.get('status')),
    }


def serialize_mutation(result, notifications):
    """Body of every successful write: upstream answer plus the toasts."""
    return {
        'result': result,
        'notifications': notifications,
    }
