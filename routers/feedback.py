"""
Feedback channels: lecturer reports, program leader feedback and principal
lecturer feedback.

Every channel is the same ticket shape: a sender, some required content, a few
optional classification tags, a default status and a creation timestamp.
Listing takes optional equality filters and returns `{<plural>, count}`.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Body, Depends, Request, status
from pymongo.database import Database

from database import create_document, get_db, get_documents, utcnow
from errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedbackChannel:
    path: str
    collection: str
    plural: str
    singular: str
    sender_field: str
    required_fields: Tuple[str, ...]
    optional_fields: Tuple[str, ...] = ()
    default_status: str = "submitted"
    filter_fields: Tuple[str, ...] = ("status",)

    def build_ticket(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        missing = [f for f in (self.sender_field,) + self.required_fields if not payload.get(f)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        ticket = {f: payload[f] for f in (self.sender_field,) + self.required_fields}
        for field in self.optional_fields:
            ticket[field] = payload.get(field)
        ticket["status"] = payload.get("status") or self.default_status
        ticket["createdAt"] = utcnow()
        return ticket

    def build_filter(self, params: Dict[str, str]) -> Dict[str, Any]:
        return {f: params[f] for f in self.filter_fields if params.get(f)}


CHANNELS = (
    FeedbackChannel(
        path="/api/lecturer-reports",
        collection="lecturer_report",
        plural="reports",
        singular="report",
        sender_field="lecturerName",
        required_fields=("course", "report"),
        optional_fields=("program", "week", "topic", "attendance", "challenges", "recommendations"),
        default_status="submitted",
        filter_fields=("lecturerName", "program", "status"),
    ),
    FeedbackChannel(
        path="/api/program-leader-feedback",
        collection="program_leader_feedback",
        plural="feedback",
        singular="feedback",
        sender_field="programLeader",
        required_fields=("lecturer", "feedback"),
        optional_fields=("program", "course", "priority"),
        default_status="sent",
        filter_fields=("lecturer", "program", "status"),
    ),
    FeedbackChannel(
        path="/api/principal-lecturer-feedback",
        collection="principal_lecturer_feedback",
        plural="feedback",
        singular="feedback",
        sender_field="principalLecturer",
        required_fields=("recipient", "feedback"),
        optional_fields=("program", "subject", "priority"),
        default_status="sent",
        filter_fields=("recipient", "program", "status"),
    ),
)


def channel_router(channel: FeedbackChannel) -> APIRouter:
    router = APIRouter(prefix=channel.path, tags=["feedback"])

    @router.post("", status_code=status.HTTP_201_CREATED)
    def submit(payload: Optional[Dict[str, Any]] = Body(None), db: Database = Depends(get_db)):
        ticket = create_document(db, channel.collection, channel.build_ticket(payload or {}))
        logger.info("New %s from %s", channel.collection, ticket[channel.sender_field])
        return {"message": "Submitted successfully", channel.singular: ticket}

    @router.get("")
    def list_tickets(request: Request, db: Database = Depends(get_db)):
        flt = channel.build_filter(dict(request.query_params))
        tickets = get_documents(db, channel.collection, flt, sort=[("createdAt", -1)])
        return {channel.plural: tickets, "count": len(tickets)}

    return router


router = APIRouter()
for _channel in CHANNELS:
    router.include_router(channel_router(_channel))
