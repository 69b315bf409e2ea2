"""
Console API views — thin DRF layer.

Each view builds the request's ConsoleContext, calls one service and
serializes the result. Errors are raised, never formatted here:
unified_exception_handler (settings.REST_FRAMEWORK) turns them into the
{type, code, message, detail, notifications} body.
"""

from rest_framework import status as http
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .cache import QueryCache
from .context import FORWARDED_HEADERS, ConsoleContext
from .exceptions import ValidationError
from .notifications.factory import get_notifier
from .review import PrescriptionReview
from .serializers import (
    serialize_financial_event_row,
    serialize_listing,
    serialize_module_row,
    serialize_mutation,
    serialize_order_detail,
    serialize_order_row,
    serialize_prescription_row,
    serialize_sample_row,
    serialize_ticket_detail,
    serialize_ticket_row,
)
from .statuses import get_status_table, get_workflow, registry_snapshot
from .upstream.factory import get_upstream_client


def build_context(request) -> ConsoleContext:
    notifier = get_notifier()
    # the exception handler drains toasts collected before a failure
    request.notifier = notifier
    headers = {
        name: request.headers[name]
        for name in FORWARDED_HEADERS
        if request.headers.get(name)
    }
    return ConsoleContext(
        client=get_upstream_client(),
        cache=QueryCache(),
        notifier=notifier,
        headers=headers,
    )


def _required(data, key):
    value = data.get(key)
    if value in (None, ""):
        raise ValidationError(
            message=f"Field {key!r} is required.",
            code="VALIDATION_ERROR",
            detail={"errors": [{"field": key, "message": "Campo obrigatório."}]},
        )
    return value


def _is_filtered(*values):
    return any(v not in (None, "", "all", "todos") for v in values)


class ConsoleView(APIView):
    """APIView with self.ctx built before the handler runs."""

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.ctx = build_context(request)

    def mutation_response(self, result, status=http.HTTP_200_OK):
        return Response(serialize_mutation(result, self.ctx.notifier.drain()), status=status)


# ---------------------------------------------------------------------------
# Status registry
# ---------------------------------------------------------------------------

class StatusRegistryView(APIView):
    """GET /api/console/statuses/"""

    def get(self, request):
        return Response(registry_snapshot())


class StatusTableView(APIView):
    """GET /api/console/statuses/<entity_type>/"""

    def get(self, request, entity_type):
        table = get_status_table(entity_type)
        body = {
            'entity_type': entity_type,
            'statuses': [badge.as_dict() for badge in table.entries.values()],
        }
        try:
            workflow = get_workflow(entity_type)
        except ValidationError:
            workflow = None
        if workflow is not None:
            body['transitions'] = {state: list(targets) for state, targets in workflow.transitions.items()}
        return Response(body)


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------

class TicketListView(ConsoleView):
    """GET / POST /api/console/tickets/"""

    def get(self, request):
        q = request.query_params
        search, status, priority, category = q.get('search'), q.get('status'), q.get('priority'), q.get('category')
        rows = services.list_tickets(
            self.ctx, search=search, status=status, priority=priority, category=category,
        )
        return Response(serialize_listing(
            'ticket', rows, serialize_ticket_row,
            filtered=_is_filtered(search, status, priority, category),
        ))

    def post(self, request):
        ticket = services.create_ticket(self.ctx, request.data)
        return self.mutation_response(ticket, status=http.HTTP_201_CREATED)


class TicketDetailView(ConsoleView):
    """GET /api/console/tickets/<id>/"""

    def get(self, request, ticket_id):
        return Response(serialize_ticket_detail(services.get_ticket(self.ctx, ticket_id)))


class TicketCommentView(ConsoleView):
    """POST /api/console/tickets/<id>/comments/"""

    def post(self, request, ticket_id):
        comment = services.add_ticket_comment(self.ctx, ticket_id, request.data)
        return self.mutation_response(comment, status=http.HTTP_201_CREATED)


class TicketStatusView(ConsoleView):
    """PATCH /api/console/tickets/<id>/status/ {status}"""

    def patch(self, request, ticket_id):
        target = _required(request.data, 'status')
        return self.mutation_response(services.change_ticket_status(self.ctx, ticket_id, target))


class TicketPriorityView(ConsoleView):
    """PATCH /api/console/tickets/<id>/priority/ {priority}"""

    def patch(self, request, ticket_id):
        priority = _required(request.data, 'priority')
        return self.mutation_response(services.change_ticket_priority(self.ctx, ticket_id, priority))


class TicketAssignView(ConsoleView):
    """PATCH /api/console/tickets/<id>/assign/ {assignToId} (null unassigns)"""

    def patch(self, request, ticket_id):
        if 'assignToId' not in request.data:
            _required(request.data, 'assignToId')
        result = services.assign_ticket(self.ctx, ticket_id, request.data.get('assignToId'))
        return self.mutation_response(result)


# ---------------------------------------------------------------------------
# Prescriptions
# ---------------------------------------------------------------------------

class PrescriptionListView(ConsoleView):
    """GET /api/console/prescriptions/?organizationId=&status=&search="""

    def get(self, request):
        q = request.query_params
        search, status = q.get('search'), q.get('status')
        rows = services.list_prescriptions(
            self.ctx, organization_id=q.get('organizationId'), status=status, search=search,
        )
        return Response(serialize_listing(
            'prescription', rows, serialize_prescription_row,
            filtered=_is_filtered(search, status),
        ))


class PrescriptionReviewView(ConsoleView):
    """
    GET  /api/console/prescriptions/<id>/review/  — open for review
    POST /api/console/prescriptions/<id>/review/  — {action: approve|reject, notes?}
    """

    def get(self, request, prescription_id):
        review = PrescriptionReview(self.ctx, organization_id=request.query_params.get('organizationId'))
        return Response(serialize_prescription_row(review.open(prescription_id)))

    def post(self, request, prescription_id):
        action = _required(request.data, 'action')
        result = services.review_prescription(
            self.ctx, prescription_id, action, request.data.get('notes') or '',
            organization_id=request.data.get('organizationId') or request.query_params.get('organizationId'),
        )
        return self.mutation_response(result)


# ---------------------------------------------------------------------------
# Organization orders
# ---------------------------------------------------------------------------

class OrderListView(ConsoleView):
    """GET /api/console/orders/?search=&status="""

    def get(self, request):
        search, status = request.query_params.get('search'), request.query_params.get('status')
        rows = services.list_orders(self.ctx, search=search, status=status)
        return Response(serialize_listing(
            'order', rows, serialize_order_row, filtered=_is_filtered(search, status),
        ))


class OrderDetailView(ConsoleView):
    """GET /api/console/orders/<id>/"""

    def get(self, request, order_id):
        return Response(serialize_order_detail(services.get_order(self.ctx, order_id)))


class OrderStatusView(ConsoleView):
    """PATCH /api/console/orders/<id>/status/ {status, trackingCode?, note?}"""

    def patch(self, request, order_id):
        target = _required(request.data, 'status')
        result = services.change_order_status(
            self.ctx, order_id, target,
            tracking_code=request.data.get('trackingCode'),
            note=request.data.get('note'),
        )
        return self.mutation_response(result)


# ---------------------------------------------------------------------------
# Laboratory samples
# ---------------------------------------------------------------------------

class SampleListView(ConsoleView):
    """GET /api/console/samples/?search=&status=&priority="""

    def get(self, request):
        q = request.query_params
        search, status, priority = q.get('search'), q.get('status'), q.get('priority')
        rows = services.list_samples(self.ctx, search=search, status=status, priority=priority)
        return Response(serialize_listing(
            'sample', rows, serialize_sample_row, filtered=_is_filtered(search, status, priority),
        ))


class SampleStatusView(ConsoleView):
    """PUT|PATCH /api/console/samples/<id>/status/ {status, notes?}"""

    def put(self, request, sample_id):
        target = _required(request.data, 'status')
        result = services.change_sample_status(
            self.ctx, sample_id, target, notes=request.data.get('notes'),
        )
        return self.mutation_response(result)

    patch = put


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------

class ModuleListView(ConsoleView):
    """GET /api/console/modules/"""

    def get(self, request):
        search = request.query_params.get('search')
        rows = services.list_modules(self.ctx, search=search)
        return Response(serialize_listing(
            'module', rows, serialize_module_row, filtered=_is_filtered(search),
        ))


class ModulePlanListView(ConsoleView):
    """GET /api/console/module-plans/"""

    def get(self, request):
        plans = services.list_module_plans(self.ctx)
        return Response({'count': len(plans), 'plans': plans})


class ModuleStatusView(ConsoleView):
    """PUT /api/console/modules/<id>/status/ {isActive}"""

    def put(self, request, module_id):
        if 'isActive' not in request.data:
            _required(request.data, 'isActive')
        result = services.set_module_active(self.ctx, module_id, request.data.get('isActive'))
        return self.mutation_response(result)


# ---------------------------------------------------------------------------
# Financial events
# ---------------------------------------------------------------------------

class FinancialEventListView(ConsoleView):
    """GET / POST /api/console/financial-events/"""

    def get(self, request):
        q = request.query_params
        search, status, event_type = q.get('search'), q.get('status'), q.get('type')
        rows = services.list_financial_events(
            self.ctx, search=search, status=status, event_type=event_type,
        )
        return Response(serialize_listing(
            'financial_event', rows, serialize_financial_event_row,
            filtered=_is_filtered(search, status, event_type),
        ))

    def post(self, request):
        event = services.create_financial_event(self.ctx, request.data)
        return self.mutation_response(event, status=http.HTTP_201_CREATED)


class FinancialEventStatusView(ConsoleView):
    """PATCH /api/console/financial-events/<id>/status/ {status}"""

    def patch(self, request, event_id):
        target = _required(request.data, 'status')
        return self.mutation_response(services.change_financial_event_status(self.ctx, event_id, target))


# ---------------------------------------------------------------------------
# Suppliers / partner benefits
# ---------------------------------------------------------------------------

class SupplierCreateView(ConsoleView):
    """POST /api/console/suppliers/ (multipart, optional logo)"""

    def post(self, request):
        supplier = services.create_supplier(self.ctx, request.data, files=request.FILES)
        return self.mutation_response(supplier, status=http.HTTP_201_CREATED)


class PartnerBenefitCreateView(ConsoleView):
    """POST /api/console/partner-benefits/"""

    def post(self, request):
        benefit = services.create_partner_benefit(self.ctx, request.data)
        return self.mutation_response(benefit, status=http.HTTP_201_CREATED)
