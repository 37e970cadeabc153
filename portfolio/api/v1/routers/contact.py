from fastapi import APIRouter, Depends

from portfolio.api.v1.dependencies import get_contact_service
from portfolio.core.schemas import MessageOut
from portfolio.features.contact.schemas import ContactIn
from portfolio.features.contact.services import ContactService

router = APIRouter(
    prefix="/contact",
    tags=["contact"],
)

@router.post(
    "",
    summary="Envoyer un message via le formulaire de contact",
    response_model=MessageOut,
    responses={
        400: {"description": "Email, objet et message requis"},
        500: {"description": "Échec de l'envoi"},
    },
)
def send_contact_message(payload: ContactIn, svc: ContactService = Depends(get_contact_service)):
    svc.send(payload)
    return MessageOut(message="Email sent successfully")
