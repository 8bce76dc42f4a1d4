# api/triage/services/pdf/triage_pdf_builder.py
"""
PDF del historial de triaje de un paciente.

USO:
    from api.triage.services.pdf import TriagePDFBuilder

    pdf_bytes = TriagePDFBuilder.generar(paciente, registros, laboratorio)
"""
import io
import logging

from django.utils import timezone
from django.utils.html import escape
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
)

logger = logging.getLogger(__name__)

# ─── Paleta ────────────────────────────────────────────────────────────────
COLOR_PRIMARIO = colors.HexColor('#1B4F72')   # Cabeceras
COLOR_ACENTO = colors.HexColor('#D6EAF8')     # Filas alternas
COLOR_BORDE = colors.HexColor('#AED6F1')
COLOR_TEXTO = colors.HexColor('#1C2833')
COLOR_SUBTEXTO = colors.HexColor('#5D6D7E')

ANCHO_PAGINA = 170 * mm


def _estilos():
    base = getSampleStyleSheet()

    def ps(name, **kwargs):
        return ParagraphStyle(name, parent=base['Normal'], **kwargs)

    return {
        'titulo': ps('Titulo', fontSize=14, fontName='Helvetica-Bold',
                     textColor=COLOR_PRIMARIO, alignment=TA_CENTER, spaceAfter=4),
        'subtitulo': ps('Subtitulo', fontSize=9, fontName='Helvetica',
                        textColor=COLOR_SUBTEXTO, alignment=TA_CENTER),
        'seccion': ps('Seccion', fontSize=10, fontName='Helvetica-Bold',
                      textColor=colors.white),
        'etiqueta': ps('Etiqueta', fontSize=8, fontName='Helvetica-Bold', textColor=COLOR_SUBTEXTO),
        'valor': ps('Valor', fontSize=8, fontName='Helvetica', textColor=COLOR_TEXTO),
        'celda': ps('Celda', fontSize=7, fontName='Helvetica', textColor=COLOR_TEXTO),
    }


ESTILOS = _estilos()

COLUMNAS_SIGNOS = [
    ('Fecha', None),
    ('FC', 'heart_rate'),
    ('FR', 'respiratory_rate'),
    ('SpO2', 'oxygen_saturation'),
    ('T °C', 'temperature_celsius'),
    ('PA', 'blood_pressure'),
    ('Talla', 'height_cm'),
    ('Peso', 'weight_kg'),
    ('IMC', 'bmi'),
]


def _texto(valor):
    return '-' if valor in (None, '') else escape(str(valor))


class TriagePDFBuilder:

    @classmethod
    def generar(cls, paciente, registros, laboratorio=None) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=20 * mm,
            rightMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Triaje {paciente.nombre}",
            author=laboratorio.name if laboratorio else 'Laboratorio',
        )

        story = []
        story.extend(cls._encabezado(paciente, laboratorio))
        story.extend(cls._tabla_signos(registros))
        for registro in registros:
            story.extend(cls._detalle(registro))

        doc.build(story, onFirstPage=cls._pie_pagina, onLaterPages=cls._pie_pagina)
        buffer.seek(0)
        logger.info(f"PDF de triaje generado para paciente {paciente.id} ({len(registros)} registros)")
        return buffer.read()

    @classmethod
    def _encabezado(cls, paciente, laboratorio):
        datos = [
            [Paragraph('Paciente', ESTILOS['etiqueta']), Paragraph(_texto(paciente.nombre), ESTILOS['valor']),
             Paragraph('Cédula', ESTILOS['etiqueta']), Paragraph(_texto(paciente.cedula), ESTILOS['valor'])],
            [Paragraph('Edad', ESTILOS['etiqueta']), Paragraph(_texto(paciente.edad), ESTILOS['valor']),
             Paragraph('Género', ESTILOS['etiqueta']), Paragraph(_texto(paciente.gender), ESTILOS['valor'])],
        ]
        tabla = Table(datos, colWidths=[25 * mm, 60 * mm, 25 * mm, 60 * mm])
        tabla.setStyle(TableStyle([
            ('GRID', (0, 0), (-1, -1), 0.3, COLOR_BORDE),
            ('BACKGROUND', (0, 0), (0, -1), COLOR_ACENTO),
            ('BACKGROUND', (2, 0), (2, -1), COLOR_ACENTO),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ]))
        return [
            Paragraph(escape(laboratorio.name) if laboratorio else 'Historial de triaje', ESTILOS['titulo']),
            Paragraph('Historial de triaje', ESTILOS['subtitulo']),
            Spacer(1, 4 * mm),
            tabla,
            Spacer(1, 6 * mm),
        ]

    @classmethod
    def _encabezado_seccion(cls, titulo):
        tabla = Table([[Paragraph(titulo.upper(), ESTILOS['seccion'])]], colWidths=[ANCHO_PAGINA])
        tabla.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), COLOR_PRIMARIO),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        return tabla

    @classmethod
    def _tabla_signos(cls, registros):
        elementos = [cls._encabezado_seccion('Signos vitales'), Spacer(1, 2 * mm)]
        if not registros:
            elementos.append(Paragraph('Sin registros de triaje', ESTILOS['valor']))
            return elementos

        filas = [[Paragraph(f'<b>{titulo}</b>', ESTILOS['celda']) for titulo, _ in COLUMNAS_SIGNOS]]
        for registro in registros:
            fila = [Paragraph(f"{timezone.localtime(registro.measurement_date):%d/%m/%Y %H:%M}", ESTILOS['celda'])]
            fila.extend(
                Paragraph(_texto(getattr(registro, campo)), ESTILOS['celda'])
                for _, campo in COLUMNAS_SIGNOS[1:]
            )
            filas.append(fila)

        tabla = Table(filas, colWidths=[34 * mm] + [17 * mm] * (len(COLUMNAS_SIGNOS) - 1), repeatRows=1)
        tabla.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), COLOR_ACENTO),
            ('GRID', (0, 0), (-1, -1), 0.3, COLOR_BORDE),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F8FBFD')]),
        ]))
        elementos.extend([tabla, Spacer(1, 6 * mm)])
        return elementos

    @classmethod
    def _detalle(cls, registro):
        campos = [
            ('Motivo de consulta', registro.reason),
            ('Antecedentes personales', registro.personal_background),
            ('Antecedentes familiares', registro.family_history),
            ('Hábitos psicobiológicos', registro.psychobiological_habits),
            ('Examen físico', registro.examen_fisico),
            ('Comentario', registro.comment),
        ]
        campos = [(etiqueta, valor) for etiqueta, valor in campos if valor]
        if not campos:
            return []

        fecha = timezone.localtime(registro.measurement_date)
        elementos = [Paragraph(f'<b>Triaje del {fecha:%d/%m/%Y %H:%M}</b>', ESTILOS['valor']), Spacer(1, 1 * mm)]
        for etiqueta, valor in campos:
            elementos.append(Paragraph(f'<b>{etiqueta}:</b> {escape(valor)}', ESTILOS['valor']))
        elementos.extend([
            Spacer(1, 2 * mm),
            HRFlowable(width='100%', thickness=0.3, color=COLOR_BORDE),
            Spacer(1, 3 * mm),
        ])
        return elementos

    @staticmethod
    def _pie_pagina(canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica', 7)
        canvas.setFillColor(COLOR_SUBTEXTO)
        ancho, _ = A4
        canvas.drawString(20 * mm, 12 * mm, doc.title)
        canvas.drawRightString(ancho - 20 * mm, 12 * mm, f'Página {doc.page}')
        canvas.restoreState()
