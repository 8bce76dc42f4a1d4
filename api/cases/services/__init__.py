from .case_service import CaseService
from .code_generator_service import CodeGeneratorService
from .document_service import DocumentService
from .email_service import CaseEmailService
from .image_storage_service import CaseImageService
from .pdf_storage_service import PdfStorageService
from .waiting_room_service import WaitingRoomService, puede_avanzar, restriccion_de_sede
from .workflow_service import WorkflowService, calcular_pasos, paso_inicial

__all__ = [
    'CaseService',
    'CodeGeneratorService',
    'DocumentService',
    'CaseEmailService',
    'CaseImageService',
    'PdfStorageService',
    'WaitingRoomService',
    'WorkflowService',
    'calcular_pasos',
    'paso_inicial',
    'puede_avanzar',
    'restriccion_de_sede',
]
