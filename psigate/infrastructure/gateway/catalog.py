"""
Account Manager action catalog.

Each entry names the action code, where the call arguments go in the request,
the success codes the gateway documents (or actually returns) and the response
field handed back to the caller.

Known gaps between the published API (v1.1.08) and the live gateway, kept as is:

- template delete/enable/disable and template item delete/enable/disable
  (CTL04, CTL08, CTL09, CTL14, CTL18, CTL19) take the template id as ``RBCID``
- immediate charge (RBC99) answers ``PSI-0000`` with ``Invoice`` and ``Result``
  and repeats ``RBCID`` inside ``Invoice``, so the whole response is returned
- register template (CTL01) returns an empty ``TemplateID``
- item add actions need the holder's required fields, not only its id
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from psigate.application.dtos.actions import ActionDescriptor

_MISSING = object()


@dataclass(frozen=True)
class Arg:
    """Placeholder for a call argument inside a payload template."""

    name: str
    default: Any = _MISSING

    @property
    def required(self) -> bool:
        return self.default is _MISSING


@dataclass(frozen=True)
class ActionDefinition:
    name: str
    code: str
    template: Mapping[str, Any]
    success_codes: tuple[str, ...]
    result_field: Optional[str] = None
    doc: str = ""
    params: tuple[Arg, ...] = field(init=False, default=())

    def __post_init__(self):
        found: dict[str, Arg] = {}
        _collect_args(self.template, found)
        # positional order: required arguments first, each in template order
        params = sorted(found.values(), key=lambda arg: not arg.required)
        object.__setattr__(self, "params", tuple(params))

    def bind(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        if len(args) > len(self.params):
            raise TypeError(f"{self.name}() takes {len(self.params)} positional arguments but {len(args)} were given")
        bound: dict[str, Any] = {}
        for param, value in zip(self.params, args):
            bound[param.name] = value
        for key, value in kwargs.items():
            if key in bound:
                raise TypeError(f"{self.name}() got multiple values for argument {key!r}")
            if key not in {p.name for p in self.params}:
                raise TypeError(f"{self.name}() got an unexpected keyword argument {key!r}")
            bound[key] = value
        for param in self.params:
            if param.name not in bound:
                if param.required:
                    raise TypeError(f"{self.name}() missing required argument {param.name!r}")
                bound[param.name] = param.default
        return bound

    def describe(self, *args: Any, **kwargs: Any) -> ActionDescriptor:
        values = self.bind(*args, **kwargs)
        return ActionDescriptor(
            action_code=self.code,
            payload=render(self.template, values),
            success_codes=self.success_codes,
            result_field=self.result_field,
        )


def _collect_args(template: Any, found: dict) -> None:
    if isinstance(template, Arg):
        found.setdefault(template.name, template)
    elif isinstance(template, Mapping):
        for value in template.values():
            _collect_args(value, found)


def render(template: Any, values: Mapping[str, Any]) -> Any:
    """Substitute ``Arg`` placeholders, keeping the template's field order."""
    if isinstance(template, Arg):
        value = values[template.name]
        # a mutable dict default must not leak between calls
        return dict(value) if isinstance(value, dict) else value
    if isinstance(template, Mapping):
        return {key: render(value, values) for key, value in template.items()}
    return template


def _summary(name, code, codes, result, doc):
    return ActionDefinition(name, code, {"Condition": Arg("condition", default={})}, codes, result, doc)


def _by(name, code, key, arg, codes, result="ReturnCode", doc="", *, update=False):
    condition = {key: Arg(arg)}
    template: dict = {"Condition": condition}
    if update:
        template["Update"] = Arg("update")
    return ActionDefinition(name, code, template, codes, result, doc)


def _by_item(name, code, key, arg, codes, doc=""):
    return ActionDefinition(
        name,
        code,
        {"Condition": {key: Arg(arg), "ItemSerialNo": Arg("item_serial_no")}},
        codes,
        "ReturnCode",
        doc,
    )


def _submit(name, code, tag, arg, codes, result, doc=""):
    return ActionDefinition(name, code, {tag: Arg(arg)}, codes, result, doc)


ACCOUNT_ACTIONS = (
    _summary("account_summary", "AMA00", ("RPA-0020", "RPA-0021"), "Account", "Retrieve account summary."),
    _submit("account_register", "AMA01", "Account", "account", ("RPA-0000",), "Account", "Register a new account."),
    _by("account_update", "AMA02", "AccountID", "account_id", ("RPA-0022",), update=True, doc="Update an account."),
    _by("account_details", "AMA05", "AccountID", "account_id", ("RPA-0020", "RPA-0021"), "Account", "Retrieve account details."),
    _by("account_enable", "AMA08", "AccountID", "account_id", ("RPA-0046",), doc="Enable account(s)."),
    _by("account_disable", "AMA09", "AccountID", "account_id", ("RPA-0040",), doc="Disable account(s)."),
    ActionDefinition(
        "account_card_add",
        "AMA11",
        {"Account": {"AccountID": Arg("account_id"), "CardInfo": Arg("card_info")}},
        ("RPA-0015",),
        "Account",
        "Add credit cards to an account. The result lists only the cards added.",
    ),
    ActionDefinition(
        "account_card_update",
        "AMA12",
        {"Condition": {"AccountID": Arg("account_id"), "SerialNo": Arg("serial_no")}, "Update": Arg("update")},
        ("RPA-0022",),
        "ReturnCode",
        "Update a card of an account.",
    ),
    ActionDefinition(
        "account_card_delete",
        "AMA14",
        {"Condition": {"AccountID": Arg("account_id"), "SerialNo": Arg("serial_no")}},
        ("RPA-0058",),
        "ReturnCode",
        "Delete a card of an account.",
    ),
    ActionDefinition(
        "account_card_enable",
        "AMA18",
        {"Condition": {"AccountID": Arg("account_id"), "SerialNo": Arg("serial_no")}},
        ("RPA-0048",),
        "ReturnCode",
        "Enable a card of an account.",
    ),
    ActionDefinition(
        "account_card_disable",
        "AMA19",
        {"Condition": {"AccountID": Arg("account_id"), "SerialNo": Arg("serial_no")}},
        ("RPA-0042",),
        "ReturnCode",
        "Disable a card of an account.",
    ),
    ActionDefinition(
        "account_register_from_order",
        "AMA20",
        {"Condition": {"AccountID": Arg("account_id", default=None), "OrderID": Arg("order_id"), "StoreID": Arg("store_id")}},
        ("RPA-0150",),
        "Account",
        "Register an account from the card of a past order.",
    ),
    ActionDefinition(
        "account_card_add_from_order",
        "AMA21",
        {"Condition": {"AccountID": Arg("account_id", default=None), "OrderID": Arg("order_id"), "StoreID": Arg("store_id")}},
        ("RPA-0015",),
        "Account",
        "Add the card of a past order to an account.",
    ),
)

CHARGE_ACTIONS = (
    _summary("charge_summary", "RBC00", ("RRC-0060", "RRC-0061"), "Charge", "Retrieve recurring charge summary."),
    _submit("charge_register", "RBC01", "Charge", "charge", ("RRC-0000",), "Charge", "Register recurring charge(s)."),
    _by("charge_update", "RBC02", "RBCID", "rbcid", ("RRC-0072",), update=True, doc="Update a recurring charge."),
    _by("charge_delete", "RBC04", "RBCID", "rbcid", ("RRC-0082",), doc="Delete a recurring charge."),
    _by("charge_details", "RBC05", "RBCID", "rbcid", ("RRC-0060", "RRC-0061"), "Charge", "Retrieve recurring charge details."),
    _by("charge_enable", "RBC08", "RBCID", "rbcid", ("RRC-0190",), doc="Enable recurring charge(s)."),
    _by("charge_disable", "RBC09", "RBCID", "rbcid", ("RRC-0090",), doc="Disable recurring charge(s)."),
    _submit("charge_immediate", "RBC99", "Charge", "charge", ("PSI-0000",), None, "Run an immediate charge."),
    _submit("charge_item_add", "RBC11", "Charge", "charge", ("RRC-0065",), "Charge", "Add items to a recurring charge."),
    _by_item("charge_item_delete", "RBC14", "RBCID", "rbcid", ("RRC-0098",), "Delete a recurring charge item."),
    _by_item("charge_item_enable", "RBC18", "RBCID", "rbcid", ("RRC-0095",), "Enable a recurring charge item."),
    _by_item("charge_item_disable", "RBC19", "RBCID", "rbcid", ("RRC-0092",), "Disable a recurring charge item."),
    _by("charge_update_from_template", "RBC52", "TemplateID", "template_id", ("RRC-0072",), doc="Apply a template to its charges."),
)

TEMPLATE_ACTIONS = (
    _summary("template_summary", "CTL00", ("CTL-0060", "CTL-0061"), "ChargeTemplate", "Retrieve charge template summary."),
    _submit("template_register", "CTL01", "ChargeTemplate", "charge_template", ("CTL-0000",), "ChargeTemplate", "Register a charge template."),
    _by("template_update", "CTL02", "TemplateID", "template_id", ("CTL-0072",), update=True, doc="Update a charge template."),
    _by("template_delete", "CTL04", "RBCID", "template_id", ("CTL-0082",), doc="Delete a charge template."),
    _by("template_details", "CTL05", "TemplateID", "template_id", ("CTL-0060", "CTL-0061"), "ChargeTemplate", "Retrieve charge template details."),
    _by("template_enable", "CTL08", "RBCID", "template_id", ("CTL-0190",), doc="Enable a charge template."),
    _by("template_disable", "CTL09", "RBCID", "template_id", ("CTL-0090",), doc="Disable a charge template."),
    _submit("template_item_add", "CTL11", "ChargeTemplate", "charge_template", ("CTL-0065",), "ReturnCode", "Add items to a charge template."),
    _by_item("template_item_delete", "CTL14", "RBCID", "template_id", ("CTL-0098",), "Delete a charge template item."),
    _by_item("template_item_enable", "CTL18", "RBCID", "template_id", ("CTL-0192",), "Enable a charge template item."),
    _by_item("template_item_disable", "CTL19", "RBCID", "template_id", ("CTL-0092",), "Disable a charge template item."),
)

INVOICE_ACTIONS = (
    _summary("invoice_summary", "INV00", ("RIV-0060", "RIV-0061"), "Invoice", "Retrieve invoice summary."),
    _by("invoice_update", "INV02", "InvoiceNo", "invoice_no", ("RIV-0072",), update=True, doc="Update an invoice."),
    _by("invoice_details", "INV05", "InvoiceNo", "invoice_no", ("RIV-0060", "RIV-0061"), "Invoice", "Retrieve invoice details."),
    _by("invoice_paid", "INV08", "InvoiceNo", "invoice_no", ("RIV-0190",), doc="Mark an invoice as paid."),
    _by("invoice_outstanding", "INV09", "InvoiceNo", "invoice_no", ("RIV-0090",), doc="Mark an invoice as outstanding."),
    _by("invoice_rebill", "INV99", "InvoiceNo", "invoice_no", ("RIV-0198",), "Invoice", "Rebill an invoice."),
)

EMAIL_REPORT_ACTIONS = (
    _summary("email_report_summary", "EMR00", ("EMR-0060", "EMR-0061"), "EmailReportSetting", "Retrieve email report settings summary."),
    _submit("email_report_register", "EMR01", "EmailReportSetting", "email_report_setting", ("EMR-0000",), "EmailReportSetting", "Register an email report."),
    _by("email_report_update", "EMR02", "Type", "report_type", ("EMR-0072",), update=True, doc="Update an email report."),
    _by("email_report_delete", "EMR04", "Type", "report_type", ("EMR-0082",), doc="Delete an email report."),
    _by("email_report_details", "EMR05", "Type", "report_type", ("EMR-0060", "EMR-0061"), "EmailReportSetting", "Retrieve email report details."),
    _by("email_report_enable", "EMR08", "Type", "report_type", ("EMR-0190",), doc="Enable email report(s)."),
    _by("email_report_disable", "EMR09", "Type", "report_type", ("EMR-0090",), doc="Disable email report(s)."),
    _by("email_report_immediate", "EMR99", "Type", "report_type", ("EMR-0099",), doc="Send an email report now."),
)

ACTIONS: dict[str, ActionDefinition] = {
    definition.name: definition
    for definition in (
        *ACCOUNT_ACTIONS,
        *CHARGE_ACTIONS,
        *TEMPLATE_ACTIONS,
        *INVOICE_ACTIONS,
        *EMAIL_REPORT_ACTIONS,
    )
}

ACTIONS_BY_CODE: dict[str, ActionDefinition] = {definition.code: definition for definition in ACTIONS.values()}
