"""
Status tables, one per entity type.

Adding an entity type: declare its table here and register it in
registry._build_registry(). Labels are the Portuguese copy shown on the
badges; color classes are the front-end's utility classes.
"""

from .types import StatusBadge, StatusTable


def _table(entity_type: str, rows) -> StatusTable:
    return StatusTable(
        entity_type=entity_type,
        entries={
            value: StatusBadge(value=value, label=label, color_class=color, variant=variant)
            for value, label, color, variant in rows
        },
    )


# ── Support tickets ─────────────────────────────────────────────────────────

TICKET_STATUS = _table('ticket', [
    ('novo',                'Novo',                'bg-gray-100 text-gray-800',     'outline'),
    ('em_analise',          'Em Análise',          'bg-blue-100 text-blue-800',     'outline'),
    ('em_desenvolvimento',  'Em Desenvolvimento',  'bg-indigo-100 text-indigo-800', 'outline'),
    ('aguardando_resposta', 'Aguardando Resposta', 'bg-yellow-100 text-yellow-800', 'outline'),
    ('resolvido',           'Resolvido',           'bg-green-100 text-green-800',   'outline'),
    ('fechado',             'Fechado',             'bg-gray-100 text-gray-500',     'outline'),
    ('cancelado',           'Cancelado',           'bg-red-100 text-red-800',       'outline'),
])

TICKET_PRIORITY = _table('ticket_priority', [
    ('baixa',   'Baixa',   'bg-green-100 text-green-800',   'outline'),
    ('media',   'Média',   'bg-blue-100 text-blue-800',     'outline'),
    ('alta',    'Alta',    'bg-orange-100 text-orange-800', 'outline'),
    ('critica', 'Crítica', 'bg-red-100 text-red-800',       'outline'),
])


# ── Pharmacist prescription review ──────────────────────────────────────────

PRESCRIPTION_STATUS = _table('prescription', [
    ('pending',  'Pendente',  'bg-yellow-100 text-yellow-800', 'outline'),
    ('approved', 'Aprovada',  'bg-green-100 text-green-800',   'outline'),
    ('rejected', 'Rejeitada', 'bg-red-100 text-red-800',       'outline'),
])


# ── Organization sales orders ───────────────────────────────────────────────

ORDER_STATUS = _table('order', [
    ('awaiting_payment',  'Aguardando pagamento', 'bg-yellow-50 text-yellow-700 border-yellow-200', 'outline'),
    ('payment_confirmed', 'Pagamento confirmado', 'bg-blue-50 text-blue-700 border-blue-200',       'secondary'),
    ('pending',           'Pendente',             'bg-yellow-50 text-yellow-700 border-yellow-200', 'outline'),
    ('processing',        'Em processamento',     'bg-blue-50 text-blue-700 border-blue-200',       'secondary'),
    ('in_preparation',    'Em preparação',        'bg-indigo-50 text-indigo-700 border-indigo-200', 'secondary'),
    ('shipped',           'Enviado',              'bg-purple-50 text-purple-700 border-purple-200', 'secondary'),
    ('delivered',         'Entregue',             'bg-green-50 text-green-700 border-green-200',    'secondary'),
    ('canceled',          'Cancelado',            'bg-red-50 text-red-700 border-red-200',          'destructive'),
    ('refunded',          'Reembolsado',          'bg-red-50 text-red-700 border-red-200',          'destructive'),
])


# ── Laboratory samples ──────────────────────────────────────────────────────

SAMPLE_STATUS = _table('sample', [
    ('registered',       'Registrada',           'bg-gray-400 hover:bg-gray-500',     'default'),
    ('collected',        'Coletada',             'bg-blue-400 hover:bg-blue-500',     'default'),
    ('received',         'Recebida',             'bg-blue-500 hover:bg-blue-600',     'default'),
    ('in_progress',      'Em Análise',           'bg-yellow-500 hover:bg-yellow-600', 'default'),
    ('pending_approval', 'Aguardando Aprovação', 'bg-orange-500 hover:bg-orange-600', 'default'),
    ('completed',        'Concluída',            'bg-green-500 hover:bg-green-600',   'default'),
    ('rejected',         'Rejeitada',            'bg-red-500 hover:bg-red-600',       'default'),
    ('archived',         'Arquivada',            'bg-purple-500 hover:bg-purple-600', 'default'),
])

SAMPLE_PRIORITY = _table('sample_priority', [
    ('high',   'Alta',  'text-red-500',    'outline'),
    ('medium', 'Média', 'text-yellow-500', 'outline'),
    ('low',    'Baixa', 'text-green-500',  'outline'),
])


# ── Financial calendar ──────────────────────────────────────────────────────

FINANCIAL_EVENT_STATUS = _table('financial_event', [
    ('pendente',  'Pendente',  'bg-yellow-50 text-yellow-700 border-yellow-200', 'outline'),
    ('pago',      'Pago',      'bg-green-50 text-green-700 border-green-200',    'outline'),
    ('atrasado',  'Atrasado',  'bg-red-50 text-red-700 border-red-200',          'outline'),
    ('cancelado', 'Cancelado', 'bg-gray-50 text-gray-700 border-gray-200',       'outline'),
])


# ── Add-on modules ──────────────────────────────────────────────────────────

MODULE_ACTIVATION = _table('module', [
    ('active',   'Ativo',   'bg-green-100 text-green-800', 'default'),
    ('inactive', 'Inativo', 'bg-gray-100 text-gray-500',   'outline'),
])
