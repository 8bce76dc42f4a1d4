# api/cases/repositories/case_repository.py
from datetime import timedelta

from django.db.models import Count, Q, Sum
from django.db.models.functions import Lower, Trim

from common.repositories.base_repository import TenantRepository
from ..models import MedicalCase

# Valor del filtro (slug) -> valor exacto guardado
MAPEO_TIPOS_EXAMEN = {
    'inmunohistoquimica': 'Inmunohistoquímica',
    'citologia': 'Citología',
    'biopsia': 'Biopsia',
}

ESTADOS_SALA_ACTIVOS = ('pendiente_triaje', 'esperando_consulta')

# Tipos de examen visibles por rol
RESTRICCION_POR_ROL = {
    'residente': ['Biopsia'],
    'citotecno': ['Citología'],
    'patologo': ['Biopsia', 'Inmunohistoquímica'],
}

CAMPOS_ORDEN = {
    'created_at': 'fecha_creacion',
    'fecha_creacion': 'fecha_creacion',
    'date': 'date',
    'code': 'code',
    'exam_type': 'exam_type',
    'branch': 'branch',
    'total_amount': 'total_amount',
    'payment_status': 'payment_status',
    'treating_doctor': 'treating_doctor',
    'nombre': 'patient__nombre',
    'cedula': 'patient__cedula',
}


def _normalizar(valor):
    return (valor or '').strip().lower()


class CaseRepository(TenantRepository[MedicalCase]):
    """Repositorio para operaciones de base de datos de Casos médicos"""

    model = MedicalCase

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).select_related('patient', 'laboratory')

    @classmethod
    def obtener_por_codigo(cls, laboratorio_id, codigo):
        return cls.queryset(laboratorio_id).filter(code__iexact=codigo.strip()).first()

    @classmethod
    def obtener_por_paciente(cls, laboratorio_id, paciente_id):
        return cls.queryset(laboratorio_id).filter(patient_id=paciente_id).order_by('-fecha_creacion')

    @staticmethod
    def filtrar_por_fechas(queryset, date_from=None, date_to=None):
        """Filtra por fecha de creación; ``date_to`` incluye el día completo"""
        if date_from:
            queryset = queryset.filter(fecha_creacion__date__gte=date_from)
        if date_to:
            queryset = queryset.filter(fecha_creacion__date__lt=date_to + timedelta(days=1))
        return queryset

    @classmethod
    def filtrar(cls, laboratorio_id, filtros):
        """
        Aplica los filtros del listado de casos.
        ``filtros`` ya viene validado (fechas como ``date``, listas como ``list``).
        """
        queryset = cls.queryset(laboratorio_id)

        search = (filtros.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(code__icontains=search)
                | Q(treating_doctor__icontains=search)
                | Q(patient__nombre__icontains=search)
                | Q(patient__cedula__icontains=search)
            )

        if filtros.get('branch'):
            queryset = queryset.filter(branch=filtros['branch'])

        sedes = [_normalizar(b) for b in filtros.get('branch_filter') or [] if b]
        if sedes:
            queryset = queryset.annotate(
                branch_normalizada=Lower(Trim('branch'))
            ).filter(branch_normalizada__in=sedes)

        queryset = cls.filtrar_por_fechas(queryset, filtros.get('date_from'), filtros.get('date_to'))

        exam_type = filtros.get('exam_type')
        if exam_type:
            queryset = queryset.filter(exam_type=MAPEO_TIPOS_EXAMEN.get(exam_type, exam_type))

        if filtros.get('consulta'):
            queryset = queryset.filter(consulta=filtros['consulta'])

        if filtros.get('payment_status'):
            queryset = queryset.filter(payment_status=filtros['payment_status'])

        document_status = filtros.get('document_status')
        if document_status == 'faltante':
            queryset = queryset.filter(
                Q(doc_aprobado='faltante') | Q(doc_aprobado__isnull=True) | Q(doc_aprobado='')
            )
        elif document_status:
            queryset = queryset.filter(doc_aprobado=document_status)

        pdf_status = filtros.get('pdf_status')
        if pdf_status == 'pendientes':
            queryset = queryset.filter(pdf_en_ready=False)
        elif pdf_status == 'faltantes':
            queryset = queryset.filter(pdf_en_ready=True)

        if filtros.get('cito_status'):
            queryset = queryset.filter(cito_status=filtros['cito_status'])

        if filtros.get('doctor_filter'):
            queryset = queryset.filter(treating_doctor__in=filtros['doctor_filter'])

        if filtros.get('origin_filter'):
            queryset = queryset.filter(origin__in=filtros['origin_filter'])

        if filtros.get('email_sent') is not None:
            queryset = queryset.filter(email_sent=filtros['email_sent'])

        restringidos = RESTRICCION_POR_ROL.get(filtros.get('user_role'))
        if restringidos:
            queryset = queryset.filter(exam_type__in=restringidos)

        campo = CAMPOS_ORDEN.get(filtros.get('sort_field') or 'created_at', 'fecha_creacion')
        if filtros.get('sort_direction', 'desc') == 'desc':
            campo = f'-{campo}'
        return queryset.order_by(campo, '-fecha_creacion')

    @classmethod
    def estadisticas(cls, laboratorio_id, date_from=None, date_to=None, branch=None):
        queryset = cls.filtrar_por_fechas(super().queryset(laboratorio_id), date_from, date_to)
        if branch:
            queryset = queryset.filter(branch=branch)

        totales = queryset.aggregate(
            total_cases=Count('id'),
            total_revenue=Sum('total_amount'),
            paid_cases=Count('id', filter=Q(payment_status='Pagado')),
            pending_cases=Count('id', filter=Q(payment_status='Incompleto')),
        )

        por_examen = (
            queryset.exclude(exam_type='')
            .values('exam_type').annotate(total=Count('id')).order_by()
        )
        por_sede = (
            queryset.exclude(branch='')
            .values('branch').annotate(total=Count('id')).order_by()
        )

        return {
            'totalCases': totales['total_cases'],
            'totalRevenue': totales['total_revenue'] or 0,
            'paidCases': totales['paid_cases'],
            'pendingCases': totales['pending_cases'],
            'examTypeBreakdown': {fila['exam_type']: fila['total'] for fila in por_examen},
            'branchBreakdown': {fila['branch']: fila['total'] for fila in por_sede},
        }

    # Sala de espera

    @classmethod
    def sala_de_espera(cls, laboratorio_id, branch=None):
        """Casos pendientes de triaje o esperando consulta, en orden de llegada"""
        queryset = cls.queryset(laboratorio_id).filter(estado_spt__in=ESTADOS_SALA_ACTIVOS)
        if branch:
            queryset = queryset.filter(branch=branch)
        return queryset.order_by('fecha_creacion')

    @classmethod
    def conteo_sala_de_espera(cls, laboratorio_id, branch=None):
        queryset = super().queryset(laboratorio_id).filter(estado_spt__in=ESTADOS_SALA_ACTIVOS)
        if branch:
            queryset = queryset.filter(branch=branch)
        return queryset.aggregate(
            pendiente_triaje=Count('id', filter=Q(estado_spt='pendiente_triaje')),
            esperando_consulta=Count('id', filter=Q(estado_spt='esperando_consulta')),
            total=Count('id'),
        )

    @classmethod
    def sedes_con_casos(cls, laboratorio_id):
        return list(
            super().queryset(laboratorio_id).exclude(branch='')
            .order_by('branch').values_list('branch', flat=True).distinct()
        )

    @classmethod
    def pasar_a_consulta(cls, laboratorio_id, paciente_id):
        """Los casos del paciente que esperaban triaje pasan a esperar consulta"""
        return super().queryset(laboratorio_id).filter(
            patient_id=paciente_id, estado_spt='pendiente_triaje'
        ).update(estado_spt='esperando_consulta')


CAMPOS_ORDEN_VALIDOS = list(CAMPOS_ORDEN)
