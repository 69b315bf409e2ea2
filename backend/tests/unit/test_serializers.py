"""
Unit tests for serializer functions.

覆盖 listing / empty state, badges on rows, order detail items.
"""
from console.serializers import (
    serialize_listing,
    serialize_order_detail,
    serialize_prescription_row,
    serialize_ticket_detail,
    serialize_ticket_row,
)
from tests.conftest import OrderFactory, PrescriptionFactory, TicketFactory


class TestSerializeListing:

    def test_rows_with_columns(self):
        result = serialize_listing('ticket', [TicketFactory(), TicketFactory()], serialize_ticket_row)

        assert result['count'] == 2
        assert {'key': 'status', 'label': 'Status'} in result['columns']
        assert 'empty_state' not in result

    def test_empty_list_is_placeholder_not_headers(self):
        result = serialize_listing('ticket', [], serialize_ticket_row)

        assert result == {
            'count': 0,
            'empty_state': {'icon': 'ticket', 'text': 'Nenhum ticket encontrado', 'hint': '', 'retry': True},
        }

    def test_filtered_empty_list(self):
        result = serialize_listing('order', [], serialize_ticket_row, filtered=True)

        assert 'columns' not in result
        assert result['empty_state']['retry'] is False
        assert result['empty_state']['hint']


class TestRows:

    def test_ticket_row_badges_and_transitions(self):
        row = serialize_ticket_row(TicketFactory(status='cancelado', priority='critica'))

        assert row['status']['value'] == 'cancelado'
        assert row['status']['label'] == 'Cancelado'
        assert row['priority']['label'] == 'Crítica'
        # terminal
        assert row['transitions'] == []

    def test_unknown_status_renders_raw(self):
        row = serialize_ticket_row(TicketFactory(status='migrado'))
        assert row['status']['label'] == 'migrado'
        assert row['transitions'] == []

    def test_prescription_reviewable_only_when_pending(self):
        assert serialize_prescription_row(PrescriptionFactory())['reviewable'] is True
        assert serialize_prescription_row(PrescriptionFactory(status='rejected'))['reviewable'] is False

    def test_ticket_detail_comments(self):
        ticket = TicketFactory(status='resolvido', resolvedAt='2025-03-11T10:00:00Z')
        result = serialize_ticket_detail({
            'ticket': ticket,
            'comments': [{'id': 1, 'content': 'Resolvido!', 'isInternal': False, 'createdAt': '2025-03-11T10:00:00Z'}],
            'attachments': [],
        })

        assert result['ticket']['resolved_at'] == '11/03/2025 07:00'
        assert result['ticket']['closed_at'] is None
        assert result['comments'][0]['is_internal'] is False


class TestSerializeOrderDetail:

    def test_items_parsed_and_totalled(self):
        result = serialize_order_detail(OrderFactory())

        assert [i['name'] for i in result['items']] == ['Óleo CBD', 'Pomada']
        assert result['items'][0]['unit_price_display'] == 'R$ 120,00'
        assert result['items_total'] == 'R$ 250,00'
        assert result['total'] == 'R$ 250,00'

    def test_malformed_item_skipped(self):
        order = OrderFactory(items=['{broken', '{"name": "Pomada", "price": 65.0, "quantity": 1}'])
        result = serialize_order_detail(order)

        assert [i['name'] for i in result['items']] == ['Pomada']

    def test_status_badge_and_transitions(self):
        result = serialize_order_detail(OrderFactory(status='shipped'))

        assert result['status']['variant'] == 'secondary'
        assert [t['value'] for t in result['transitions']] == ['delivered', 'canceled', 'refunded']
