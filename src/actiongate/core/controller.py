# actiongate/core/controller.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from actiongate.protocol.enums import (
    ButtonVariant,
    DisclaimerVariant,
    ExecutionStatus,
    TrustLevel,
)
from actiongate.protocol.errors import ActionValidationError
from actiongate.protocol.models import (
    ActionContext,
    ActionView,
    ButtonView,
    Disclaimer,
    ExecutionState,
    InputView,
    SecurityVerdict,
    TrustAssessment,
    is_sign_transaction_error,
)

from .action import ActionComponent, ActionModel
from .callbacks import fire_on_action_mount, fire_on_render
from .execution import (
    Block,
    ExecutionEvent,
    Fail,
    Finish,
    Initiate,
    Reset,
    Unblock,
    apply,
    initial_state,
)
from .security import SecurityGate

logger = logging.getLogger("actiongate.controller")

SOFT_LIMIT_BUTTONS = 10
SOFT_LIMIT_INPUTS = 3

UNKNOWN_ERROR = "Unknown error"

MALICIOUS_ADVISORY = (
    "This Action or it's origin has been flagged as an unsafe action, & has been blocked. "
    "If you believe this action has been blocked in error, please submit an issue."
)
UNREGISTERED_ADVISORY = (
    "This Action or it's origin has not yet been registered. "
    "Only use it if you trust the source."
)
PROVIDER_BLOCKS_NOTICE = " Your action provider blocks execution of this action."

_BUTTON_VARIANTS: Dict[ExecutionStatus, ButtonVariant] = {
    ExecutionStatus.BLOCKED: ButtonVariant.DEFAULT,
    ExecutionStatus.IDLE: ButtonVariant.DEFAULT,
    ExecutionStatus.EXECUTING: ButtonVariant.DEFAULT,
    ExecutionStatus.SUCCESS: ButtonVariant.SUCCESS,
    ExecutionStatus.ERROR: ButtonVariant.ERROR,
}

_BUTTON_LABELS: Dict[ExecutionStatus, Optional[str]] = {
    ExecutionStatus.BLOCKED: None,
    ExecutionStatus.IDLE: None,
    ExecutionStatus.EXECUTING: "Executing",
    ExecutionStatus.SUCCESS: "Completed",
    ExecutionStatus.ERROR: "Failed",
}


class ExecutionController:
    """
    Drives one rendered action through connect -> post -> sign -> confirm.

    Responsibilities:
      - Decide the initial state (idle/blocked) from a fresh trust assessment
      - Re-assess trust right before every execution, override and reset
      - Run the adapter protocol for one component at a time
      - Derive button/input/disclaimer view models from the current state

    One controller per rendered action; never shared.
    """

    def __init__(
        self,
        action: ActionModel,
        gate: SecurityGate,
        *,
        website_url: Optional[str] = None,
        website_text: Optional[str] = None,
        callbacks: Optional[Any] = None,
    ) -> None:
        self.action = action
        self.website_url = website_url
        self.website_text = website_text
        self._gate = gate
        self._callbacks = callbacks

        self._assessment, self._verdict = self._assess()
        self._state = initial_state(self._verdict)
        # Assessment the user chose to proceed with via override().
        self._overridden: Optional[TrustAssessment] = None

        fire_on_action_mount(callbacks, action, website_url or action.url, self._assessment.action)

    # ===========================================================
    # Read surface
    # ===========================================================
    @property
    def state(self) -> ExecutionState:
        return self._state

    @property
    def status(self) -> ExecutionStatus:
        return self._state.status

    @property
    def error_message(self) -> Optional[str]:
        return self._state.error_message

    @property
    def success_message(self) -> Optional[str]:
        return self._state.success_message

    @property
    def executing_action(self) -> Optional[ActionComponent]:
        if self._state.executing_action_id is None:
            return None
        return self.action.component(self._state.executing_action_id)

    @property
    def assessment(self) -> TrustAssessment:
        return self._assessment

    @property
    def overall_trust(self) -> TrustLevel:
        return self._verdict.overall

    @property
    def is_passing_security_check(self) -> bool:
        return self._verdict.admitted

    @property
    def can_override(self) -> bool:
        return self._state.status is ExecutionStatus.BLOCKED and self._verdict.admitted

    # ===========================================================
    # Commands
    # ===========================================================
    async def execute(
        self,
        component: Union[ActionComponent, str],
        params: Optional[Dict[str, str]] = None,
    ) -> ExecutionState:
        """
        Run one component. Only starts from idle; returns the resulting state.
        """
        component = self._resolve_component(component)

        if self._state.status is not ExecutionStatus.IDLE:
            logger.debug(
                "Ignoring execute(%s) on '%s' while %s",
                component.component_id,
                self.action.title,
                self._state.status.value,
            )
            return self._state

        if component.parameter is not None and params:
            component.set_value(params.get(component.parameter.name))

        assessment, verdict = self._assess()
        if assessment != self._assessment and not verdict.admitted:
            logger.warning(
                "Trust changed for '%s' (overall=%s), blocking execution",
                self.action.title,
                verdict.overall.value,
            )
            self._assessment, self._verdict = assessment, verdict
            self._overridden = None
            self._dispatch(Block())
            return self._state

        self._dispatch(Initiate(component.component_id))

        context = ActionContext(
            action=self.action,
            action_type=self._assessment.action,
            original_url=self.website_url or self.action.url,
            triggered_linked_action=component,
        )
        adapter = self.action.adapter

        try:
            account = await adapter.connect(context)
            if not account:
                logger.info("Wallet connection declined for '%s'", self.action.title)
                self._dispatch(Reset())
                return self._state

            tx = await component.post(account)
            sign_result = await adapter.sign_transaction(tx.transaction, context)

            if not sign_result or is_sign_transaction_error(sign_result):
                logger.info("Signing declined for '%s'", self.action.title)
                self._dispatch(Reset())
            else:
                await adapter.confirm_transaction(sign_result.signature, context)
                self._dispatch(Finish(tx.message))
        except Exception as ex:
            logger.warning("Execution of '%s' failed: %s", self.action.title, ex)
            self._dispatch(Fail(str(ex) or UNKNOWN_ERROR))

        return self._state

    def override(self) -> bool:
        """
        Ignore the warning and proceed.

        Only possible while blocked and only when the configured policy
        admits the current classification.
        """
        if self._state.status is not ExecutionStatus.BLOCKED:
            return False

        self._assessment, self._verdict = self._assess()
        if not self._verdict.admitted:
            logger.info("Override refused for '%s': policy blocks execution", self.action.title)
            return False

        logger.warning("User overrode block for '%s' (overall=%s)", self.action.title, self._verdict.overall.value)
        self._overridden = self._assessment
        self._dispatch(Unblock())
        return True

    def reset(self) -> ExecutionState:
        """
        Clear executing/error/success fields.

        The fresh assessment decides where reset lands, as it would for a fresh
        mount: not admitted or malicious goes to blocked. A malicious
        classification the user already overrode stays unblocked until the
        classification changes.
        """
        self._assessment, self._verdict = self._assess()
        if self._overridden is not None and self._overridden != self._assessment:
            self._overridden = None

        self._dispatch(initial_event(self._verdict, overridden=self._overridden is not None))
        return self._state

    # ===========================================================
    # View models
    # ===========================================================
    def buttons(self) -> List[ButtonView]:
        return [self._button_view(c) for c in self._visible(with_parameter=False, limit=SOFT_LIMIT_BUTTONS)]

    def inputs(self) -> List[InputView]:
        views: List[InputView] = []
        for c in self._visible(with_parameter=True, limit=SOFT_LIMIT_INPUTS):
            views.append(
                InputView(
                    placeholder=c.parameter.label,
                    name=c.parameter.name,
                    disabled=self._disabled,
                    button=self._button_view(c),
                )
            )
        return views

    def disclaimer(self) -> Optional[Disclaimer]:
        passing = self._verdict.admitted
        suffix = "" if passing else PROVIDER_BLOCKS_NOTICE

        if self.overall_trust is TrustLevel.MALICIOUS and self._state.status is ExecutionStatus.BLOCKED:
            return Disclaimer(
                variant=DisclaimerVariant.ERROR,
                message=MALICIOUS_ADVISORY + suffix,
                can_override=passing,
            )
        if self.overall_trust is TrustLevel.UNKNOWN:
            return Disclaimer(variant=DisclaimerVariant.WARNING, message=UNREGISTERED_ADVISORY + suffix)
        return None

    def view(self) -> ActionView:
        error = None
        if self._state.status is not ExecutionStatus.SUCCESS:
            error = self._state.error_message or self.action.error

        return ActionView(
            title=self.action.title,
            description=self.action.description,
            type=self.overall_trust,
            image=self.action.icon,
            website_url=self.website_url,
            website_text=self.website_text,
            disclaimer=self.disclaimer(),
            buttons=self.buttons(),
            inputs=self.inputs(),
            error=error,
            success=self._state.success_message,
        )

    def render(self) -> Tuple[ActionView, Any]:
        """Build the view and give the host's on_render hook a chance to supply its own."""
        return self.view(), fire_on_render(self._callbacks, self.action)

    # ===========================================================
    # Internals
    # ===========================================================
    def _assess(self) -> Tuple[TrustAssessment, SecurityVerdict]:
        assessment = self._gate.assess(self.action.url, self.website_url)
        return assessment, self._gate.evaluate(assessment)

    def _dispatch(self, event: ExecutionEvent) -> None:
        previous = self._state
        self._state = apply(previous, event)
        logger.debug(
            "'%s': %s --%s--> %s",
            self.action.title,
            previous.status.value,
            type(event).__name__,
            self._state.status.value,
        )

    def _resolve_component(self, component: Union[ActionComponent, str]) -> ActionComponent:
        if isinstance(component, str):
            return self.action.component(component)
        if component.parent is not self.action:
            raise ActionValidationError(f"Component {component.component_id!r} belongs to another action")
        return component

    def _visible(self, *, with_parameter: bool, limit: int) -> List[ActionComponent]:
        executing_id = self._state.executing_action_id
        visible = [
            c
            for c in self.action.components
            if (c.parameter is not None) == with_parameter
            and (executing_id is None or c.component_id == executing_id)
        ]
        return visible[:limit]

    @property
    def _disabled(self) -> bool:
        return self.action.disabled or self._state.status is not ExecutionStatus.IDLE

    def _button_view(self, c: ActionComponent) -> ButtonView:
        status = self._state.status
        return ButtonView(
            component_id=c.component_id,
            text=_BUTTON_LABELS[status] or c.label,
            loading=status is ExecutionStatus.EXECUTING and c.component_id == self._state.executing_action_id,
            disabled=self._disabled,
            variant=_BUTTON_VARIANTS[status],
        )


def initial_event(verdict: SecurityVerdict, overridden: bool = False) -> ExecutionEvent:
    """
    Event that puts a controller back where a fresh mount would start it.

    `overridden` means the user already overrode this exact classification;
    an admitted malicious action then stays unblocked.
    """
    if not verdict.admitted:
        return Block()
    if verdict.overall is TrustLevel.MALICIOUS and not overridden:
        return Block()
    return Reset()
