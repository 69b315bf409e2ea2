"""
Shared fixtures for all tests.

factory-boy factories and the in-memory FakeUpstream live here so both
unit/ and integration/ can import them. Nothing talks to a real platform API:
integration tests patch console.views.get_upstream_client with FakeUpstream.
"""
import re
from unittest.mock import patch

import factory
import pytest
from django.core.cache import cache
from django.test import Client

from console.cache import QueryCache
from console.context import ConsoleContext
from console.exceptions import UpstreamError
from console.notifications.notifiers import ResponseNotifier


# ---------------------------------------------------------------------------
# Factories (upstream JSON shapes)
# ---------------------------------------------------------------------------

class TicketFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    title = factory.Sequence(lambda n: f'Erro no relatório {n}')
    description = 'O relatório mensal não carrega desde ontem.'
    status = 'novo'
    priority = 'media'
    category = 'bug'
    organizationId = 1
    createdById = 10
    assignedToId = None
    createdAt = '2025-03-10T14:30:00Z'
    updatedAt = '2025-03-10T14:30:00Z'


class PrescriptionFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    patientName = 'Maria Souza'
    doctorName = 'Dr. Carlos Lima'
    product = 'Óleo CBD 3000mg'
    dosage = '10 gotas'
    status = 'pending'
    notes = None
    organizationId = 1
    createdAt = '2025-03-01T09:00:00Z'


class OrderFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    orderNumber = factory.Sequence(lambda n: f'PED-{1000 + n}')
    customerName = 'João Pereira'
    status = 'pending'
    total = 250.0
    items = factory.LazyFunction(lambda: [
        '{"id": "p1", "name": "Óleo CBD", "price": 150.0, "discountPrice": 120.0, "quantity": 1}',
        '{"id": "p2", "name": "Pomada", "price": 65.0, "quantity": 2}',
    ])
    additionalInfo = factory.LazyFunction(dict)
    createdAt = '2025-03-05T18:45:00Z'


class SampleFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    code = factory.Sequence(lambda n: f'AM-{2025}{n:04d}')
    description = 'Extrato full spectrum'
    status = 'registered'
    priority = 'medium'
    testTypes = factory.LazyFunction(lambda: ['cannabinoids'])
    dueDate = '2025-03-20T00:00:00Z'


class FinancialEventFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    title = 'Aluguel'
    date = '2025-03-10'
    amount = 12500
    type = 'despesa'
    category = 'Aluguel'
    status = 'pendente'
    description = ''


class ModuleFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: n + 1)
    name = factory.Sequence(lambda n: f'Módulo {n}')
    description = 'Gestão de estoque'
    isActive = True


class FinancialEventFormFactory(factory.DictFactory):
    """Valid body for POST /api/console/financial-events/."""
    title = 'Conta de luz'
    date = '2025-04-05'
    amount = '2350.00'
    type = 'despesa'
    category = 'Utilidades'


class TicketFormFactory(factory.DictFactory):
    title = 'Erro ao exportar relatório'
    description = 'Ao exportar o relatório de vendas, nada acontece.'
    category = 'bug'
    priority = 'alta'


class PartnerBenefitFormFactory(factory.DictFactory):
    partnerId = 3
    title = '10% em consultas'
    description = 'Desconto em todas as consultas presenciais.'
    discountType = 'percentage'
    discountValue = 10
    redemptionInstructions = 'Apresente a carteirinha.'
    maxUsesPerMember = 1
    validFrom = '2025-04-01'


# ---------------------------------------------------------------------------
# FakeUpstream — in-memory stand-in for UpstreamClient
# ---------------------------------------------------------------------------

def _not_found(method, path):
    return UpstreamError(
        message='Not found',
        code='UPSTREAM_NOT_FOUND',
        detail={'method': method, 'path': path, 'status': 404},
        http_status=404,
    )


class FakeUpstream:
    """
    Same get()/send() surface as UpstreamClient, backed by dicts.

    fail_writes_with: when set, every send() raises it and changes nothing.
    calls: every (method, path, payload) seen, reads and writes alike.
    """

    def __init__(self):
        self.tickets = {}
        self.comments = {}
        self.prescriptions = {}
        self.orders = {}
        self.samples = {}
        self.financial_events = {}
        self.modules = {}
        self.module_plans = []
        self.suppliers = []
        self.partner_benefits = []
        self.calls = []
        self.headers_seen = []
        self.fail_writes_with = None

    # ── seeding ────────────────────────────────────────────────────────────

    def add(self, collection, *rows):
        store = getattr(self, collection)
        for row in rows:
            store[row['id']] = row
        return rows[0] if len(rows) == 1 else rows

    def writes(self):
        return [c for c in self.calls if c[0] != 'GET']

    def reads(self, path=None):
        return [c for c in self.calls if c[0] == 'GET' and (path is None or c[1] == path)]

    # ── UpstreamClient surface ─────────────────────────────────────────────

    def get(self, path, *, params=None, headers=None):
        self.calls.append(('GET', path, params))
        self.headers_seen.append(headers)

        if path == '/api/tickets':
            return list(self.tickets.values())
        m = re.fullmatch(r'/api/tickets/(\d+)', path)
        if m:
            ticket = self.tickets.get(int(m.group(1)))
            if ticket is None:
                raise _not_found('GET', path)
            return {'ticket': ticket, 'comments': self.comments.get(ticket['id'], []), 'attachments': []}
        if path == '/api/pharmacist/prescriptions':
            org = (params or {}).get('organizationId')
            return [
                p for p in self.prescriptions.values()
                if org in (None, '') or str(p.get('organizationId')) == str(org)
            ]
        if path == '/api/organization/orders':
            return list(self.orders.values())
        m = re.fullmatch(r'/api/organization/orders/(\d+)', path)
        if m:
            order = self.orders.get(int(m.group(1)))
            if order is None:
                raise _not_found('GET', path)
            return order
        if path == '/api/laboratory/samples':
            return list(self.samples.values())
        if path == '/api/financial/events':
            return list(self.financial_events.values())
        if path == '/api/modules':
            return list(self.modules.values())
        if path == '/api/module-plans':
            return list(self.module_plans)
        raise _not_found('GET', path)

    def send(self, method, path, *, json=None, data=None, files=None, headers=None):
        self.calls.append((method, path, json if json is not None else data))
        self.headers_seen.append(headers)
        if self.fail_writes_with is not None:
            raise self.fail_writes_with

        m = re.fullmatch(r'/api/tickets/(\d+)/(status|priority|assign|comments)', path)
        if m:
            ticket = self.tickets.get(int(m.group(1)))
            if ticket is None:
                raise _not_found(method, path)
            action = m.group(2)
            if action == 'status':
                ticket['status'] = json['status']
            elif action == 'priority':
                ticket['priority'] = json['priority']
            elif action == 'assign':
                ticket['assignedToId'] = json['assignToId']
            else:
                comment = {'id': len(self.comments.get(ticket['id'], [])) + 1, **json}
                self.comments.setdefault(ticket['id'], []).append(comment)
                if ticket['status'] == 'aguardando_resposta':
                    ticket['status'] = 'resolvido'
                return comment
            return ticket
        if path == '/api/tickets' and method == 'POST':
            ticket = {'id': max(self.tickets, default=0) + 1, 'status': 'novo', **json}
            self.tickets[ticket['id']] = ticket
            return {'ticket': ticket}

        m = re.fullmatch(r'/api/pharmacist/prescriptions/(\d+)', path)
        if m:
            prescription = self.prescriptions[int(m.group(1))]
            prescription.update(status=json['status'], notes=json.get('notes'))
            return prescription
        m = re.fullmatch(r'/api/organization/orders/(\d+)/status', path)
        if m:
            order = self.orders[int(m.group(1))]
            order['status'] = json['status']
            return order
        m = re.fullmatch(r'/api/laboratory/samples/(\d+)/status', path)
        if m:
            sample = self.samples[int(m.group(1))]
            sample['status'] = json['status']
            return sample
        m = re.fullmatch(r'/api/financial/events/(\d+)/status', path)
        if m:
            event = self.financial_events[int(m.group(1))]
            event['status'] = json['status']
            return event
        if path == '/api/financial/events' and method == 'POST':
            event = {'id': max(self.financial_events, default=0) + 1, **json}
            self.financial_events[event['id']] = event
            return event
        m = re.fullmatch(r'/api/modules/(\d+)/status', path)
        if m:
            module = self.modules[int(m.group(1))]
            module['isActive'] = json['isActive']
            return module
        if path == '/api/suppliers' and method == 'POST':
            supplier = {'id': len(self.suppliers) + 1, **data, 'hasLogo': bool(files)}
            self.suppliers.append(supplier)
            return supplier
        if path == '/api/social/partner-benefits' and method == 'POST':
            benefit = {'id': len(self.partner_benefits) + 1, **json}
            self.partner_benefits.append(benefit)
            return benefit
        raise _not_found(method, path)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_query_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def ctx(upstream):
    """ConsoleContext wired to FakeUpstream with a collecting notifier."""
    return ConsoleContext(client=upstream, cache=QueryCache(), notifier=ResponseNotifier())


@pytest.fixture
def api_client(upstream):
    """Django test client; every console view talks to the same FakeUpstream."""
    with patch('console.views.get_upstream_client', return_value=upstream):
        yield Client()
