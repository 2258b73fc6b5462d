"""Declarative table of every GoCardless API endpoint.

Each resource maps operation names to an :class:`Endpoint`. Services and
request builders are generated from this table; nothing here contains
control flow.
"""

from typing import Dict, NamedTuple, Optional, Type

from . import models
from .descriptor import DEFAULT_REQUEST_ENVELOPE
from .models import Resource
from .utils import path_placeholders


class Endpoint(NamedTuple):
    method: str
    path: str
    envelope: str
    model: Type[Resource]
    request_envelope: str = DEFAULT_REQUEST_ENVELOPE
    paginated: bool = False
    idempotent: bool = False
    has_body: bool = False
    conflict_path: Optional[str] = None

    @property
    def path_params(self):
        return path_placeholders(self.path)


def _create(path, envelope, model, idempotent=True, request_envelope=None):
    return Endpoint(
        "POST",
        path,
        envelope,
        model,
        request_envelope=request_envelope or envelope,
        idempotent=idempotent,
        has_body=True,
        conflict_path=f"{path}/:identity" if idempotent else None,
    )


def _list(path, envelope, model):
    return Endpoint("GET", path, envelope, model, paginated=True)


def _get(path, envelope, model):
    return Endpoint("GET", path, envelope, model)


def _update(path, envelope, model):
    return Endpoint("PUT", path, envelope, model, request_envelope=envelope, has_body=True)


def _action(path, envelope, model):
    return Endpoint("POST", path, envelope, model, has_body=True)


def _crud(collection, envelope, model, idempotent=True, update=True):
    operations = {
        "create": _create(collection, envelope, model, idempotent=idempotent),
        "list": _list(collection, envelope, model),
        "get": _get(f"{collection}/:identity", envelope, model),
    }
    if update:
        operations["update"] = _update(f"{collection}/:identity", envelope, model)
    return operations


RESOURCES: Dict[str, Dict[str, Endpoint]] = {
    "balances": {
        "list": _list("balances", "balances", models.Balance),
    },
    "bank_account_holder_verifications": {
        "create": _create(
            "bank_account_holder_verifications",
            "bank_account_holder_verifications",
            models.BankAccountHolderVerification,
        ),
        "get": _get(
            "bank_account_holder_verifications/:identity",
            "bank_account_holder_verifications",
            models.BankAccountHolderVerification,
        ),
    },
    "bank_authorisations": {
        "create": _create(
            "bank_authorisations", "bank_authorisations", models.BankAuthorisation
        ),
        "get": _get(
            "bank_authorisations/:identity",
            "bank_authorisations",
            models.BankAuthorisation,
        ),
    },
    "bank_details_lookups": {
        "create": _create(
            "bank_details_lookups",
            "bank_details_lookups",
            models.BankDetailsLookup,
            idempotent=False,
        ),
    },
    "billing_requests": {
        "create": _create("billing_requests", "billing_requests", models.BillingRequest),
        "list": _list("billing_requests", "billing_requests", models.BillingRequest),
        "get": _get(
            "billing_requests/:identity", "billing_requests", models.BillingRequest
        ),
        "collect_customer_details": _action(
            "billing_requests/:identity/actions/collect_customer_details",
            "billing_requests",
            models.BillingRequest,
        ),
        "collect_bank_account": _action(
            "billing_requests/:identity/actions/collect_bank_account",
            "billing_requests",
            models.BillingRequest,
        ),
        "confirm_payer_details": _action(
            "billing_requests/:identity/actions/confirm_payer_details",
            "billing_requests",
            models.BillingRequest,
        ),
        "fulfil": _action(
            "billing_requests/:identity/actions/fulfil",
            "billing_requests",
            models.BillingRequest,
        ),
        "cancel": _action(
            "billing_requests/:identity/actions/cancel",
            "billing_requests",
            models.BillingRequest,
        ),
        "notify": _action(
            "billing_requests/:identity/actions/notify",
            "billing_requests",
            models.BillingRequest,
        ),
        "fallback": _action(
            "billing_requests/:identity/actions/fallback",
            "billing_requests",
            models.BillingRequest,
        ),
        "choose_currency": _action(
            "billing_requests/:identity/actions/choose_currency",
            "billing_requests",
            models.BillingRequest,
        ),
        "select_institution": _action(
            "billing_requests/:identity/actions/select_institution",
            "billing_requests",
            models.BillingRequest,
        ),
        "create_with_actions": _create(
            "billing_requests/create_with_actions",
            "billing_requests",
            models.BillingRequestWithAction,
            idempotent=False,
        ),
    },
    "billing_request_flows": {
        "create": _create(
            "billing_request_flows",
            "billing_request_flows",
            models.BillingRequestFlow,
            idempotent=False,
        )
    },
    "billing_request_templates": _crud(
        "billing_request_templates",
        "billing_request_templates",
        models.BillingRequestTemplate,
    ),
    "blocks": {
        "create": _create("blocks", "blocks", models.Block),
        "get": _get("blocks/:identity", "blocks", models.Block),
        "list": _list("blocks", "blocks", models.Block),
        "disable": _action("blocks/:identity/actions/disable", "blocks", models.Block),
        "enable": _action("blocks/:identity/actions/enable", "blocks", models.Block),
    },
    "creditors": _crud("creditors", "creditors", models.Creditor),
    "creditor_bank_accounts": {
        **_crud(
            "creditor_bank_accounts",
            "creditor_bank_accounts",
            models.CreditorBankAccount,
            update=False,
        ),
        "disable": _action(
            "creditor_bank_accounts/:identity/actions/disable",
            "creditor_bank_accounts",
            models.CreditorBankAccount,
        ),
    },
    "creditor_bank_account_validations": {
        "validate": _action(
            "creditor_bank_accounts/validate",
            "creditor_bank_accounts",
            models.CreditorBankAccountValidate,
        ),
    },
    "currency_exchange_rates": {
        "list": _list(
            "currency_exchange_rates",
            "currency_exchange_rates",
            models.CurrencyExchangeRate,
        ),
    },
    "customers": {
        **_crud("customers", "customers", models.Customer),
        "remove": Endpoint(
            "DELETE", "customers/:identity", "customers", models.Customer, has_body=True
        ),
    },
    "customer_bank_accounts": {
        **_crud(
            "customer_bank_accounts",
            "customer_bank_accounts",
            models.CustomerBankAccount,
        ),
        "disable": _action(
            "customer_bank_accounts/:identity/actions/disable",
            "customer_bank_accounts",
            models.CustomerBankAccount,
        ),
    },
    "customer_notifications": {
        "handle": _action(
            "customer_notifications/:identity/actions/handle",
            "customer_notifications",
            models.CustomerNotification,
        ),
    },
    "events": {
        "list": _list("events", "events", models.Event),
        "get": _get("events/:identity", "events", models.Event),
    },
    "exports": {
        "list": _list("exports", "exports", models.Export),
        "get": _get("exports/:identity", "exports", models.Export),
    },
    "funds_availability": {
        "check": _get(
            "funds_availability/:identity",
            "funds_availability",
            models.FundsAvailability,
        ),
    },
    "instalment_schedules": {
        "create": _create(
            "instalment_schedules", "instalment_schedules", models.InstalmentSchedule
        ),
        "list": _list(
            "instalment_schedules", "instalment_schedules", models.InstalmentSchedule
        ),
        "get": _get(
            "instalment_schedules/:identity",
            "instalment_schedules",
            models.InstalmentSchedule,
        ),
        "cancel": _action(
            "instalment_schedules/:identity/actions/cancel",
            "instalment_schedules",
            models.InstalmentSchedule,
        ),
    },
    "institutions": {
        "list": _list("institutions", "institutions", models.Institution),
        "list_for_billing_request": _list(
            "billing_requests/:identity/institutions",
            "institutions",
            models.Institution,
        ),
    },
    "logos": {
        "create_for_creditor": _create(
            "branding/logos", "logos", models.Logo, idempotent=False
        ),
    },
    "mandates": {
        **_crud("mandates", "mandates", models.Mandate),
        "cancel": _action(
            "mandates/:identity/actions/cancel", "mandates", models.Mandate
        ),
        "reinstate": _action(
            "mandates/:identity/actions/reinstate", "mandates", models.Mandate
        ),
    },
    "mandate_imports": {
        "create": _create("mandate_imports", "mandate_imports", models.MandateImport),
        "get": _get(
            "mandate_imports/:identity", "mandate_imports", models.MandateImport
        ),
        "submit": _action(
            "mandate_imports/:identity/actions/submit",
            "mandate_imports",
            models.MandateImport,
        ),
        "cancel": _action(
            "mandate_imports/:identity/actions/cancel",
            "mandate_imports",
            models.MandateImport,
        ),
    },
    "mandate_import_entries": {
        "create": _create(
            "mandate_import_entries",
            "mandate_import_entries",
            models.MandateImportEntry,
            idempotent=False,
        ),
        "list": _list(
            "mandate_import_entries",
            "mandate_import_entries",
            models.MandateImportEntry,
        ),
    },
    "mandate_pdfs": {
        "create": _create(
            "mandate_pdfs", "mandate_pdfs", models.MandatePdf, idempotent=False
        ),
    },
    "negative_balance_limits": {
        "list": _list(
            "negative_balance_limits",
            "negative_balance_limits",
            models.NegativeBalanceLimit,
        ),
    },
    "outbound_payments": {
        **_crud("outbound_payments", "outbound_payments", models.OutboundPayment),
        "withdraw": _action(
            "outbound_payments/withdrawal",
            "outbound_payments",
            models.OutboundPayment,
        ),
        "cancel": _action(
            "outbound_payments/:identity/actions/cancel",
            "outbound_payments",
            models.OutboundPayment,
        ),
        "approve": _action(
            "outbound_payments/:identity/actions/approve",
            "outbound_payments",
            models.OutboundPayment,
        ),
    },
    "payer_themes": {
        "create_for_creditor": _create(
            "branding/payer_themes", "payer_themes", models.PayerTheme, idempotent=False
        ),
    },
    "payment_accounts": {
        "get": _get(
            "payment_accounts/:identity", "payment_accounts", models.PaymentAccount
        ),
        "list": _list("payment_accounts", "payment_accounts", models.PaymentAccount),
    },
    "payment_account_transactions": {
        "list": _list(
            "payment_accounts/:identity/transactions",
            "payment_account_transactions",
            models.PaymentAccountTransaction,
        ),
    },
    "payments": {
        **_crud("payments", "payments", models.Payment),
        "cancel": _action(
            "payments/:identity/actions/cancel", "payments", models.Payment
        ),
        "retry": _action("payments/:identity/actions/retry", "payments", models.Payment),
    },
    "payouts": {
        "list": _list("payouts", "payouts", models.Payout),
        "get": _get("payouts/:identity", "payouts", models.Payout),
        "update": _update("payouts/:identity", "payouts", models.Payout),
    },
    "payout_items": {
        "list": _list("payout_items", "payout_items", models.PayoutItem),
    },
    "redirect_flows": {
        "create": _create("redirect_flows", "redirect_flows", models.RedirectFlow),
        "get": _get("redirect_flows/:identity", "redirect_flows", models.RedirectFlow),
        "complete": _action(
            "redirect_flows/:identity/actions/complete",
            "redirect_flows",
            models.RedirectFlow,
        ),
    },
    "refunds": _crud("refunds", "refunds", models.Refund),
    "scenario_simulators": {
        "run": _action(
            "scenario_simulators/:identity/actions/run",
            "scenario_simulators",
            models.ScenarioSimulator,
        ),
    },
    "scheme_identifiers": _crud(
        "scheme_identifiers",
        "scheme_identifiers",
        models.SchemeIdentifier,
        update=False,
    ),
    "subscriptions": {
        **_crud("subscriptions", "subscriptions", models.Subscription),
        "pause": _action(
            "subscriptions/:identity/actions/pause", "subscriptions", models.Subscription
        ),
        "resume": _action(
            "subscriptions/:identity/actions/resume",
            "subscriptions",
            models.Subscription,
        ),
        "cancel": _action(
            "subscriptions/:identity/actions/cancel",
            "subscriptions",
            models.Subscription,
        ),
    },
    "tax_rates": {
        "list": _list("tax_rates", "tax_rates", models.TaxRate),
        "get": _get("tax_rates/:identity", "tax_rates", models.TaxRate),
    },
    "transferred_mandates": {
        "transferred_mandates": _get(
            "transferred_mandate/:identity",
            "transferred_mandate",
            models.TransferredMandate,
        ),
    },
    "verification_details": {
        "create": _create(
            "verification_details",
            "verification_details",
            models.VerificationDetail,
            idempotent=False,
        ),
        "list": _list(
            "verification_details", "verification_details", models.VerificationDetail
        ),
    },
    "webhooks": {
        "list": _list("webhooks", "webhooks", models.Webhook),
        "get": _get("webhooks/:identity", "webhooks", models.Webhook),
        "retry": _action("webhooks/:identity/actions/retry", "webhooks", models.Webhook),
    },
}
