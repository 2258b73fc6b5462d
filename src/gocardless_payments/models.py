"""Pydantic models for GoCardless API resources and response containers.

Resource models declare the commonly used fields of each resource. Any
other field returned by the API is kept as an extra attribute, so newer API
fields survive decoding.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Base class for all API resources."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    created_at: Optional[str] = None
    links: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)


ResourceT = TypeVar("ResourceT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Core resources
# ---------------------------------------------------------------------------
class Balance(Resource):
    amount: Optional[int] = None
    balance_type: Optional[str] = None
    currency: Optional[str] = None
    last_updated_at: Optional[str] = None


class BankAccountHolderVerification(Resource):
    actual_account_name: Optional[str] = None
    result: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None


class BankAuthorisation(Resource):
    authorisation_type: Optional[str] = None
    authorised_at: Optional[str] = None
    expires_at: Optional[str] = None
    last_visited_at: Optional[str] = None
    qr_code_url: Optional[str] = None
    redirect_uri: Optional[str] = None
    url: Optional[str] = None


class BankDetailsLookup(Resource):
    available_debit_schemes: List[str] = Field(default_factory=list)
    bank_name: Optional[str] = None
    bic: Optional[str] = None


class BillingRequest(Resource):
    status: Optional[str] = None
    actions: List[Dict[str, Any]] = Field(default_factory=list)
    fallback_enabled: Optional[bool] = None
    fallback_occurred: Optional[bool] = None
    mandate_request: Optional[Dict[str, Any]] = None
    payment_request: Optional[Dict[str, Any]] = None
    subscription_request: Optional[Dict[str, Any]] = None
    instalment_schedule_request: Optional[Dict[str, Any]] = None
    purpose_code: Optional[str] = None
    resources: Optional[Dict[str, Any]] = None


class BillingRequestFlow(Resource):
    authorisation_url: Optional[str] = None
    auto_fulfil: Optional[bool] = None
    exit_uri: Optional[str] = None
    expires_at: Optional[str] = None
    lock_bank_account: Optional[bool] = None
    lock_customer_details: Optional[bool] = None
    redirect_uri: Optional[str] = None
    session_token: Optional[str] = None


class BillingRequestTemplate(Resource):
    name: Optional[str] = None
    authorisation_url: Optional[str] = None
    mandate_request_currency: Optional[str] = None
    mandate_request_scheme: Optional[str] = None
    payment_request_amount: Optional[str] = None
    payment_request_currency: Optional[str] = None
    redirect_uri: Optional[str] = None
    updated_at: Optional[str] = None


class BillingRequestWithAction(Resource):
    bank_authorisations: Optional[Dict[str, Any]] = None
    billing_requests: Optional[Dict[str, Any]] = None


class Block(Resource):
    active: Optional[bool] = None
    block_type: Optional[str] = None
    reason_type: Optional[str] = None
    resource_reference: Optional[str] = None
    updated_at: Optional[str] = None


class Creditor(Resource):
    name: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    postal_code: Optional[str] = None
    creditor_type: Optional[str] = None
    verification_status: Optional[str] = None
    scheme_identifiers: List[Dict[str, Any]] = Field(default_factory=list)


class CreditorBankAccount(Resource):
    account_holder_name: Optional[str] = None
    account_number_ending: Optional[str] = None
    account_type: Optional[str] = None
    bank_name: Optional[str] = None
    country_code: Optional[str] = None
    currency: Optional[str] = None
    enabled: Optional[bool] = None
    verification_status: Optional[str] = None


class CreditorBankAccountValidate(Resource):
    bank_name: Optional[str] = None
    bic: Optional[str] = None
    available_debit_schemes: List[str] = Field(default_factory=list)


class CurrencyExchangeRate(Resource):
    rate: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    time: Optional[str] = None


class Customer(Resource):
    email: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    company_name: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None
    language: Optional[str] = None
    phone_number: Optional[str] = None


class CustomerBankAccount(Resource):
    account_holder_name: Optional[str] = None
    account_number_ending: Optional[str] = None
    account_type: Optional[str] = None
    bank_name: Optional[str] = None
    country_code: Optional[str] = None
    currency: Optional[str] = None
    enabled: Optional[bool] = None


class CustomerNotification(Resource):
    action_taken: Optional[str] = None
    action_taken_at: Optional[str] = None
    action_taken_by: Optional[str] = None
    type: Optional[str] = None


class Event(Resource):
    action: Optional[str] = None
    resource_type: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    resource_metadata: Optional[Dict[str, Any]] = None
    customer_notifications: Optional[List[Dict[str, Any]]] = None
    source: Optional[Dict[str, Any]] = None


class Export(Resource):
    currency: Optional[str] = None
    download_url: Optional[str] = None
    export_type: Optional[str] = None


class FundsAvailability(Resource):
    available: Optional[bool] = None


class InstalmentSchedule(Resource):
    name: Optional[str] = None
    currency: Optional[str] = None
    status: Optional[str] = None
    total_amount: Optional[int] = None
    payment_errors: Optional[Dict[str, Any]] = None


class Institution(Resource):
    name: Optional[str] = None
    bank_redirect: Optional[bool] = None
    country_code: Optional[str] = None
    icon_url: Optional[str] = None
    logo_url: Optional[str] = None
    status: Optional[str] = None
    limits: Optional[Dict[str, Any]] = None


class Logo(Resource):
    pass


class Mandate(Resource):
    status: Optional[str] = None
    reference: Optional[str] = None
    scheme: Optional[str] = None
    next_possible_charge_date: Optional[str] = None
    payments_require_approval: Optional[bool] = None
    authorisation_source: Optional[str] = None
    verified_at: Optional[str] = None


class MandateImport(Resource):
    scheme: Optional[str] = None
    status: Optional[str] = None


class MandateImportEntry(Resource):
    record_identifier: Optional[str] = None
    processing_errors: Optional[Dict[str, Any]] = None


class MandatePdf(Resource):
    url: Optional[str] = None
    expires_at: Optional[str] = None


class NegativeBalanceLimit(Resource):
    balance_limit: Optional[int] = None
    currency: Optional[str] = None


class OutboundPayment(Resource):
    amount: Optional[int] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    execution_date: Optional[str] = None
    is_withdrawal: Optional[bool] = None
    reference: Optional[str] = None
    scheme: Optional[str] = None
    status: Optional[str] = None


class PayerTheme(Resource):
    pass


class Payment(Resource):
    amount: Optional[int] = None
    amount_refunded: Optional[int] = None
    charge_date: Optional[str] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    retry_if_possible: Optional[bool] = None
    faster_ach: Optional[bool] = None
    scheme: Optional[str] = None


class PaymentAccount(Resource):
    account_balance: Optional[int] = None
    account_holder_name: Optional[str] = None
    account_number_ending: Optional[str] = None
    bank_name: Optional[str] = None
    currency: Optional[str] = None


class PaymentAccountTransaction(Resource):
    amount: Optional[int] = None
    balance_after_transaction: Optional[int] = None
    counterparty_name: Optional[str] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    direction: Optional[str] = None
    reference: Optional[str] = None
    value_date: Optional[str] = None


class Payout(Resource):
    amount: Optional[int] = None
    arrival_date: Optional[str] = None
    currency: Optional[str] = None
    deducted_fees: Optional[int] = None
    payout_type: Optional[str] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    fx: Optional[Dict[str, Any]] = None


class PayoutItem(Resource):
    amount: Optional[str] = None
    type: Optional[str] = None
    taxes: List[Dict[str, Any]] = Field(default_factory=list)


class RedirectFlow(Resource):
    description: Optional[str] = None
    confirmation_url: Optional[str] = None
    mandate_reference: Optional[str] = None
    redirect_url: Optional[str] = None
    scheme: Optional[str] = None
    session_token: Optional[str] = None
    success_redirect_url: Optional[str] = None


class Refund(Resource):
    amount: Optional[int] = None
    currency: Optional[str] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    fx: Optional[Dict[str, Any]] = None


class ScenarioSimulator(Resource):
    pass


class SchemeIdentifier(Resource):
    name: Optional[str] = None
    currency: Optional[str] = None
    reference: Optional[str] = None
    scheme: Optional[str] = None
    status: Optional[str] = None
    can_specify_mandate_reference: Optional[bool] = None


class Subscription(Resource):
    amount: Optional[int] = None
    currency: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    interval: Optional[int] = None
    interval_unit: Optional[str] = None
    day_of_month: Optional[int] = None
    month: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    count: Optional[int] = None
    upcoming_payments: List[Dict[str, Any]] = Field(default_factory=list)


class TaxRate(Resource):
    jurisdiction: Optional[str] = None
    percentage: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    type: Optional[str] = None


class TransferredMandate(Resource):
    encrypted_customer_bank_details: Optional[str] = None
    encrypted_decryption_key: Optional[str] = None
    public_key_id: Optional[str] = None


class VerificationDetail(Resource):
    address_line1: Optional[str] = None
    city: Optional[str] = None
    company_number: Optional[str] = None
    description: Optional[str] = None
    directors: List[Dict[str, Any]] = Field(default_factory=list)
    name: Optional[str] = None
    postal_code: Optional[str] = None


class Webhook(Resource):
    is_test: Optional[bool] = None
    request_body: Optional[str] = None
    request_headers: Optional[Dict[str, Any]] = None
    response_body: Optional[str] = None
    response_code: Optional[int] = None
    successful: Optional[bool] = None
    url: Optional[str] = None


# ---------------------------------------------------------------------------
# Response containers
# ---------------------------------------------------------------------------
class ListResponse(BaseModel, Generic[ResourceT]):
    """A single page of a list endpoint.

    ``after`` is the cursor for the next page and is ``None`` on the last
    page; ``before`` is ``None`` on the first page.
    """

    items: List[ResourceT] = Field(default_factory=list)
    before: Optional[str] = None
    after: Optional[str] = None
    limit: Optional[int] = None
    linked: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)


class ApiResponse(BaseModel):
    """A decoded resource together with the raw HTTP status and headers."""

    resource: Any
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
