"""
Unit tests for the service layer.

覆盖：reads through the cache, writes with invalidation + toasts,
not-found mapping, and forms rejected before any upstream request.
"""
import pytest

from console import services
from console.exceptions import BlockError, UpstreamError, ValidationError
from tests.conftest import (
    FinancialEventFactory,
    FinancialEventFormFactory,
    ModuleFactory,
    OrderFactory,
    SampleFactory,
    TicketFactory,
    TicketFormFactory,
)


class TestTickets:

    def test_list_is_filtered(self, ctx, upstream):
        upstream.add('tickets', TicketFactory(id=1, status='novo'), TicketFactory(id=2, status='fechado'))
        assert [t['id'] for t in services.list_tickets(ctx, status='novo')] == [1]

    def test_detail_not_found(self, ctx):
        with pytest.raises(BlockError) as exc_info:
            services.get_ticket(ctx, 99)

        assert exc_info.value.code == 'TICKET_NOT_FOUND'
        assert exc_info.value.http_status == 404

    def test_create(self, ctx, upstream):
        ticket = services.create_ticket(ctx, TicketFormFactory())

        assert ticket['status'] == 'novo'
        assert upstream.writes()[0][:2] == ('POST', '/api/tickets')
        assert ctx.notifier.drain()[0]['title'] == 'Ticket criado com sucesso'

    def test_invalid_ticket_form_sends_nothing(self, ctx, upstream):
        with pytest.raises(ValidationError):
            services.create_ticket(ctx, {'title': ''})

        assert upstream.writes() == []
        assert ctx.notifier.drain()[0]['variant'] == 'destructive'

    def test_comment_invalidates_ticket(self, ctx, upstream):
        upstream.add('tickets', TicketFactory(id=3, status='aguardando_resposta'))
        assert services.get_ticket(ctx, 3)['ticket']['status'] == 'aguardando_resposta'

        services.add_ticket_comment(ctx, 3, {'content': 'Funcionou, obrigado'})

        # the server moved the ticket; the next read shows it
        detail = services.get_ticket(ctx, 3)
        assert detail['ticket']['status'] == 'resolvido'
        assert detail['comments'][0]['content'] == 'Funcionou, obrigado'

    @pytest.mark.parametrize('status', ['resolvido', 'fechado', 'cancelado'])
    def test_closed_ticket_takes_no_comments(self, ctx, upstream, status):
        upstream.add('tickets', TicketFactory(id=3, status=status))

        with pytest.raises(BlockError) as exc_info:
            services.add_ticket_comment(ctx, 3, {'content': 'Ainda está com erro'})

        assert exc_info.value.code == 'TICKET_CLOSED'
        assert exc_info.value.http_status == 409
        assert upstream.writes() == []

    def test_status_change_checks_current_status(self, ctx, upstream):
        upstream.add('tickets', TicketFactory(id=4, status='fechado'))

        with pytest.raises(BlockError) as exc_info:
            services.change_ticket_status(ctx, 4, 'novo')

        assert exc_info.value.code == 'INVALID_TRANSITION'
        assert upstream.writes() == []

    def test_priority_change(self, ctx, upstream):
        upstream.add('tickets', TicketFactory(id=5, priority='media'))
        services.change_ticket_priority(ctx, 5, 'critica')

        assert upstream.writes() == [('PATCH', '/api/tickets/5/priority', {'priority': 'critica'})]

    def test_assign_and_unassign(self, ctx, upstream):
        upstream.add('tickets', TicketFactory(id=6))

        services.assign_ticket(ctx, 6, '12')
        services.assign_ticket(ctx, 6, None)

        assert [w[2] for w in upstream.writes()] == [{'assignToId': 12}, {'assignToId': None}]

    def test_assign_rejects_garbage(self, ctx, upstream):
        with pytest.raises(ValidationError):
            services.assign_ticket(ctx, 6, 'someone')
        assert upstream.writes() == []


class TestOrdersAndSamples:

    def test_order_not_found(self, ctx):
        with pytest.raises(BlockError) as exc_info:
            services.get_order(ctx, 1)
        assert exc_info.value.code == 'ORDER_NOT_FOUND'

    def test_order_status_change(self, ctx, upstream):
        upstream.add('orders', OrderFactory(id=8, status='processing'))

        services.change_order_status(ctx, 8, 'shipped', tracking_code='BR999')

        assert upstream.orders[8]['status'] == 'shipped'
        assert upstream.writes()[0][2] == {'status': 'shipped', 'trackingCode': 'BR999'}

    def test_sample_not_found(self, ctx):
        with pytest.raises(BlockError) as exc_info:
            services.change_sample_status(ctx, 3, 'collected')
        assert exc_info.value.code == 'SAMPLE_NOT_FOUND'

    def test_sample_status_change_with_notes(self, ctx, upstream):
        upstream.add('samples', SampleFactory(id=3))

        services.change_sample_status(ctx, 3, 'collected', notes='Coleta ok')

        assert upstream.writes() == [
            ('PUT', '/api/laboratory/samples/3/status', {'status': 'collected', 'notes': 'Coleta ok'}),
        ]


class TestModules:

    def test_activation_value_added(self, ctx, upstream):
        upstream.add('modules', ModuleFactory(id=1, isActive=True), ModuleFactory(id=2, isActive=False))
        assert [m['activation'] for m in services.list_modules(ctx)] == ['active', 'inactive']

    def test_toggle(self, ctx, upstream):
        upstream.add('modules', ModuleFactory(id=1, isActive=True))
        services.list_modules(ctx)

        services.set_module_active(ctx, 1, False)

        assert services.list_modules(ctx)[0]['activation'] == 'inactive'
        assert ctx.notifier.drain()[0]['title'] == 'Módulo desativado'

    def test_toggle_requires_bool(self, ctx):
        with pytest.raises(ValidationError):
            services.set_module_active(ctx, 1, 'yes')


class TestFinancialEvents:

    def test_create(self, ctx, upstream):
        event = services.create_financial_event(ctx, FinancialEventFormFactory())

        assert event['status'] == 'pendente'
        assert len(services.list_financial_events(ctx)) == 1

    def test_missing_amount_makes_no_request(self, ctx, upstream):
        upstream.add('financial_events', FinancialEventFactory(id=1))
        before = services.list_financial_events(ctx)

        with pytest.raises(ValidationError):
            services.create_financial_event(ctx, FinancialEventFormFactory(amount=''))

        assert upstream.writes() == []
        assert services.list_financial_events(ctx) == before
        assert ctx.notifier.drain() == [{
            'title': 'Dados incompletos',
            'description': 'Preencha todos os campos obrigatórios.',
            'variant': 'destructive',
        }]

    def test_status_change_is_free_form(self, ctx, upstream):
        upstream.add('financial_events', FinancialEventFactory(id=1, status='atrasado'))
        services.change_financial_event_status(ctx, 1, 'pago')
        assert upstream.financial_events[1]['status'] == 'pago'


class TestSuppliersAndBenefits:

    def test_supplier_sent_as_form_data(self, ctx, upstream):
        services.create_supplier(ctx, {'name': 'Agro Verde', 'cnpj': '12.345.678/0001-90', 'email': 'a@agro.com'})

        method, path, data = upstream.writes()[0]
        assert (method, path) == ('POST', '/api/suppliers')
        assert data['cnpj'] == '12345678000190'

    def test_upstream_error_toasts_server_message(self, ctx, upstream):
        upstream.fail_writes_with = UpstreamError('CNPJ já cadastrado', http_status=409)

        with pytest.raises(UpstreamError):
            services.create_supplier(ctx, {'name': 'Agro Verde', 'cnpj': '12345678000190', 'email': 'a@agro.com'})

        assert ctx.notifier.drain()[0] == {
            'title': 'Erro ao cadastrar fornecedor',
            'description': 'CNPJ já cadastrado',
            'variant': 'destructive',
        }

    def test_partner_benefit(self, ctx, upstream):
        services.create_partner_benefit(ctx, {
            'partnerId': 3, 'title': 'Frete grátis', 'description': 'Frete grátis acima de R$ 100.',
            'discountType': 'free_item', 'discountValue': 0, 'redemptionInstructions': 'Use o cupom.',
            'maxUsesPerMember': 2, 'couponCode': 'FRETE',
        })

        payload = upstream.partner_benefits[0]
        assert payload['couponCode'] == 'FRETE'
        assert payload['validUntil'] is None
