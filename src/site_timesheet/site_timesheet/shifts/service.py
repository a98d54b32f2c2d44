from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import current_time_text, now_local
from ..common.validators import require_duration, require_iso_date, require_non_empty, require_time_of_day
from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError
from ..records.model import WorkRecordDraft
from ..records.repository import RecordRepository
from ..sites.repository import SiteRepository
from ..workers.repository import WorkerRepository
from .actions.check_in import CheckInAction
from .actions.check_out import CheckOutAction
from .factory import ShiftActionFactory
from .model import ShiftOutcome, ShiftRequest, ShiftState

logger = logging.getLogger(__name__)


class ShiftService:
    """Shift lifecycle: check-in, check-out and manual (backfilled) entries.

    Holds no state of its own; every call reads the repository. Validation
    happens before anything is written, and repository failures propagate
    unchanged so nothing is reported as done when it was not.
    """

    def __init__(
        self,
        records: RecordRepository,
        sites: SiteRepository,
        workers: WorkerRepository,
        *,
        factory: Optional[ShiftActionFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._sites = sites
        self._workers = workers
        self._factory = factory or ShiftActionFactory()
        self._clock = clock

    def _require_worker(self, worker_id: str) -> str:
        worker_id = require_non_empty(worker_id, "Pracovník")
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Pracovník neexistuje")
        return worker_id

    def _require_site(self, site_id: str) -> str:
        site_id = require_non_empty(site_id, "Stavba")
        if not self._sites.get_by_id(site_id):
            raise NotFoundError("Stavba neexistuje")
        return site_id

    def current_state(self, worker_id: str, work_date: str) -> ShiftState:
        active = self._records.find_active(worker_id, work_date)
        last_completed = next(
            (
                r
                for r in self._records.list_all()
                if r.worker_id == worker_id and r.work_date == work_date and r.status == RecordStatus.COMPLETED
            ),
            None,
        )
        return ShiftState(worker_id=worker_id, work_date=work_date, active=active, last_completed=last_completed)

    def check_in(
        self,
        *,
        foreman_name: str,
        worker_id: str,
        site_id: str,
        work_date: str,
        start_time: Optional[str] = None,
    ) -> str:
        request = ShiftRequest(
            foreman_name=foreman_name,
            worker_id=self._require_worker(worker_id),
            site_id=self._require_site(site_id),
            work_date=require_iso_date(work_date),
            start_time=require_time_of_day(start_time or current_time_text(self._clock()), "Začiatok"),
        )
        state = self.current_state(request.worker_id, request.work_date)
        outcome = CheckInAction().apply(request, records=self._records, active=state.active)
        logger.info("Check-in worker=%s site=%s date=%s by %s", request.worker_id, request.site_id, request.work_date, foreman_name)
        return outcome.record_id

    def check_out(
        self,
        *,
        worker_id: str,
        work_date: str,
        lunch_duration: str,
        end_time: Optional[str] = None,
    ) -> str:
        worker_id = require_non_empty(worker_id, "Pracovník")
        request = ShiftRequest(
            foreman_name="",
            worker_id=worker_id,
            site_id="",
            work_date=require_iso_date(work_date),
            end_time=require_time_of_day(end_time or current_time_text(self._clock()), "Koniec"),
            lunch_duration=require_duration(lunch_duration, "Obed"),
        )
        active = self._records.find_active(request.worker_id, request.work_date)
        outcome = CheckOutAction().apply(request, records=self._records, active=active)
        logger.info("Check-out worker=%s date=%s", worker_id, request.work_date)
        return outcome.record_id

    def submit(
        self,
        *,
        foreman_name: str,
        worker_id: str,
        site_id: str,
        work_date: str,
        lunch_duration: str = "",
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> ShiftOutcome:
        """Dashboard action: check in, or check out if a shift is already open."""
        worker_id = self._require_worker(worker_id)
        work_date = require_iso_date(work_date)
        state = self.current_state(worker_id, work_date)
        action = self._factory.for_state(state)

        if state.active is None:
            request = ShiftRequest(
                foreman_name=foreman_name,
                worker_id=worker_id,
                site_id=self._require_site(site_id),
                work_date=work_date,
                start_time=require_time_of_day(start_time or current_time_text(self._clock()), "Začiatok"),
            )
        else:
            request = ShiftRequest(
                foreman_name=foreman_name,
                worker_id=worker_id,
                site_id=state.active.site_id,
                work_date=work_date,
                end_time=require_time_of_day(end_time or current_time_text(self._clock()), "Koniec"),
                lunch_duration=require_duration(lunch_duration, "Obed"),
            )

        outcome = action.apply(request, records=self._records, active=state.active)
        logger.info("Shift %s worker=%s date=%s record=%s", outcome.mode.value, worker_id, work_date, outcome.record_id)
        return outcome

    def record_manual(
        self,
        *,
        foreman_name: str,
        worker_id: str,
        site_id: str,
        work_date: str,
        start_time: str,
        end_time: str,
        lunch_duration: str,
    ) -> str:
        """Create a completed record directly, bypassing check-in/check-out."""
        draft = WorkRecordDraft(
            foreman_name=foreman_name,
            site_id=self._require_site(site_id),
            worker_id=self._require_worker(worker_id),
            work_date=require_iso_date(work_date),
            start_time=require_time_of_day(start_time, "Začiatok"),
            lunch_duration=require_duration(lunch_duration, "Obed"),
            end_time=require_time_of_day(end_time, "Koniec"),
            status=RecordStatus.COMPLETED,
        )
        if self._records.find_active(draft.worker_id, draft.work_date):
            logger.warning(
                "Manual entry for worker=%s date=%s while a live shift is open",
                draft.worker_id,
                draft.work_date,
            )
        record_id = self._records.append(draft)
        logger.info("Manual entry %s worker=%s date=%s by %s", record_id, draft.worker_id, draft.work_date, foreman_name)
        return record_id
