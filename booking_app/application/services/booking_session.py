"""Booking session workflow (state machine).

A session walks one booking attempt through seat selection, passenger
entry and submission:

    SELECTING -> ROSTER -> SUBMITTING -> CONFIRMED
                   ^            |
                   +-- FAILED <-+

The selection is an immutable value; the roster is the only mutable
state and belongs to this session alone.
"""
import dataclasses
import logging
from concurrent.futures import Executor
from decimal import Decimal
from enum import Enum
from threading import Lock
from typing import Any, Optional

from booking_app.application.use_cases.select_seat_class import select_seat_class
from booking_app.application.use_cases.submit_booking import SubmitBookingUseCase, new_request_id
from booking_app.domain.entities.booking import BookingConfirmation, BookingRequest
from booking_app.domain.entities.flight import Flight, FlightSelection
from booking_app.domain.entities.roster import PassengerRoster
from booking_app.domain.exceptions import (
    BookingAppError,
    BookingSessionError,
    OperationCancelledError,
    SubmissionInProgressError,
)
from booking_app.infrastructure.pending_call import PendingCall


class SessionState(str, Enum):
    SELECTING = "selecting"
    ROSTER = "roster"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


EDITABLE_STATES = (SessionState.ROSTER, SessionState.FAILED)


class BookingSession:
    """
    One booking attempt, from seat-class choice to confirmation.

    Only one booking request can be in flight per session. A retry after a
    failure reuses the previous request id as long as the selection, roster
    and payment method are unchanged, so the booking service can
    de-duplicate it.
    """

    def __init__(self, user_id: Optional[str] = None, payment_method: Optional[str] = None):
        self.user_id = user_id
        self.payment_method = payment_method
        self.roster = PassengerRoster()
        self.state = SessionState.SELECTING
        self.selection: Optional[FlightSelection] = None
        self.confirmation: Optional[BookingConfirmation] = None
        self.last_error: Optional[str] = None
        self._request: Optional[BookingRequest] = None
        self._pending: Optional[PendingCall] = None
        self._closed = False
        self._lock = Lock()
        self._logger = logging.getLogger(__name__)

    # Selection

    def choose_seat_class(self, flight: Flight, seat_class_id: str) -> FlightSelection:
        """Price the tapped seat class and move on to passenger entry."""
        return self.use_selection(select_seat_class(flight, seat_class_id))

    def use_selection(self, selection: FlightSelection) -> FlightSelection:
        with self._lock:
            self._require_open()
            if self.state not in (SessionState.SELECTING,) + EDITABLE_STATES:
                raise BookingSessionError("The seat class can no longer be changed.")
            self.selection = selection
            self.state = SessionState.ROSTER
        return selection

    # Roster

    def _editable_roster(self) -> PassengerRoster:
        with self._lock:
            self._require_open()
            if self.state not in EDITABLE_STATES:
                raise BookingSessionError("Passengers can no longer be changed.")
            self.state = SessionState.ROSTER
        return self.roster

    def add_passenger(self) -> None:
        self._editable_roster().add_passenger()

    def update_field(self, index: int, field_name: str, value: Any) -> None:
        self._editable_roster().update_field(index, field_name, value)

    def request_removal(self, index: int) -> None:
        self._editable_roster().request_removal(index)

    def confirm_removal(self) -> None:
        self._editable_roster().confirm_removal()

    def cancel_removal(self) -> None:
        self.roster.cancel_removal()

    def toggle_expand(self, index: int) -> None:
        # Display state only; allowed in any state
        self.roster.toggle_expand(index)

    def set_payment_method(self, payment_method: str) -> None:
        self._editable_roster()
        self.payment_method = payment_method

    def quote(self) -> Decimal:
        """Total shown to the traveller: unit price times passenger count."""
        if self.selection is None:
            raise BookingSessionError("Please choose a seat class first.")
        return self.roster.total_price(self.selection.unit_price)

    # Submission

    def _begin_submission(self, submitter: SubmitBookingUseCase) -> BookingRequest:
        with self._lock:
            self._require_open()
            if self.state == SessionState.SUBMITTING:
                raise SubmissionInProgressError()
            if self.state == SessionState.CONFIRMED:
                raise BookingSessionError("This booking has already been confirmed.")
            if self.selection is None:
                raise BookingSessionError("Please choose a seat class first.")

            previous_id = self._request.request_id if self._request else None
            request = submitter.build_request(
                self.roster, self.selection, self.user_id, self.payment_method, request_id=previous_id
            )
            if self._request is not None and request != self._request:
                request = dataclasses.replace(request, request_id=new_request_id())

            self._request = request
            self.state = SessionState.SUBMITTING
            self.last_error = None
            return request

    def _finish(self, confirmation: Optional[BookingConfirmation], error: Optional[BaseException]) -> None:
        with self._lock:
            if self._closed:
                return
            self._pending = None
            if error is None:
                self.confirmation = confirmation
                self.state = SessionState.CONFIRMED
                self._logger.info(f"Booking confirmed: {confirmation.booking_reference}")
            else:
                self.state = SessionState.FAILED
                self.last_error = error.user_message if isinstance(error, BookingAppError) \
                    else BookingAppError.default_message
                self._logger.error(f"Booking submission failed: {error}")

    def submit(self, submitter: SubmitBookingUseCase) -> BookingConfirmation:
        """
        Validate and send the booking, waiting for the answer.

        Raises:
            FormValidationError: If the roster is incomplete (state unchanged)
            SubmissionInProgressError: If a submission is already in flight
            BookingSessionError: If the session is not ready or already confirmed
            BookingAPIError: If the booking service fails (state becomes FAILED)
        """
        request = self._begin_submission(submitter)
        try:
            confirmation = submitter.execute(request)
        except Exception as e:
            self._finish(None, e)
            raise
        self._finish(confirmation, None)
        return confirmation

    def submit_async(self, submitter: SubmitBookingUseCase, executor: Executor) -> PendingCall:
        """
        Send the booking in the background.

        The returned call can be cancelled, which leaves the session FAILED
        and ready for a retry. After :meth:`close` a late response no longer
        changes the session.
        """
        request = self._begin_submission(submitter)
        try:
            pending = PendingCall.submit(executor, "create_booking", submitter.execute, request)
        except Exception as e:
            self._finish(None, e)
            raise
        with self._lock:
            self._pending = pending
        pending.add_done_callback(self._on_submitted)
        pending.add_cancel_callback(self._on_cancelled)
        return pending

    def _on_submitted(self, call: PendingCall) -> None:
        error = call.exception()
        if error is not None:
            self._finish(None, error)
        else:
            self._finish(call.result(), None)

    def _on_cancelled(self, call: PendingCall) -> None:
        # The request may still reach the service; a retry reuses its request id
        with self._lock:
            if self._pending is not call:
                return
        self._finish(None, OperationCancelledError())

    # Lifecycle

    def close(self) -> None:
        """Abandon the session; pending callbacks are invalidated."""
        with self._lock:
            self._closed = True
            pending, self._pending = self._pending, None
        if pending is not None:
            pending.cancel()
            self._logger.info("Booking session closed with a submission still pending")

    def _require_open(self) -> None:
        if self._closed:
            raise BookingSessionError("This booking session has been closed.")
