from django.urls import path

from .views import (
    FinancialEventListView,
    FinancialEventStatusView,
    ModuleListView,
    ModulePlanListView,
    ModuleStatusView,
    OrderDetailView,
    OrderListView,
    OrderStatusView,
    PartnerBenefitCreateView,
    PrescriptionListView,
    PrescriptionReviewView,
    SampleListView,
    SampleStatusView,
    StatusRegistryView,
    StatusTableView,
    SupplierCreateView,
    TicketAssignView,
    TicketCommentView,
    TicketDetailView,
    TicketListView,
    TicketPriorityView,
    TicketStatusView,
)

urlpatterns = [
    path('statuses/', StatusRegistryView.as_view(), name='status-registry'),
    path('statuses/<str:entity_type>/', StatusTableView.as_view(), name='status-table'),

    path('tickets/', TicketListView.as_view(), name='ticket-list'),
    path('tickets/<int:ticket_id>/', TicketDetailView.as_view(), name='ticket-detail'),
    path('tickets/<int:ticket_id>/comments/', TicketCommentView.as_view(), name='ticket-comments'),
    path('tickets/<int:ticket_id>/status/', TicketStatusView.as_view(), name='ticket-status'),
    path('tickets/<int:ticket_id>/priority/', TicketPriorityView.as_view(), name='ticket-priority'),
    path('tickets/<int:ticket_id>/assign/', TicketAssignView.as_view(), name='ticket-assign'),

    path('prescriptions/', PrescriptionListView.as_view(), name='prescription-list'),
    path('prescriptions/<int:prescription_id>/review/', PrescriptionReviewView.as_view(), name='prescription-review'),

    path('orders/', OrderListView.as_view(), name='order-list'),
    path('orders/<int:order_id>/', OrderDetailView.as_view(), name='order-detail'),
    path('orders/<int:order_id>/status/', OrderStatusView.as_view(), name='order-status'),

    path('samples/', SampleListView.as_view(), name='sample-list'),
    path('samples/<int:sample_id>/status/', SampleStatusView.as_view(), name='sample-status'),

    path('modules/', ModuleListView.as_view(), name='module-list'),
    path('module-plans/', ModulePlanListView.as_view(), name='module-plan-list'),
    path('modules/<int:module_id>/status/', ModuleStatusView.as_view(), name='module-status'),

    path('financial-events/', FinancialEventListView.as_view(), name='financial-event-list'),
    path('financial-events/<int:event_id>/status/', FinancialEventStatusView.as_view(), name='financial-event-status'),

    path('suppliers/', SupplierCreateView.as_view(), name='supplier-create'),
    path('partner-benefits/', PartnerBenefitCreateView.as_view(), name='partner-benefit-create'),
]
