# api/utils/pagination.py
import math


def parse_int(valor, default, minimo=1, maximo=None):
    try:
        numero = int(valor)
    except (TypeError, ValueError):
        return default
    if numero < minimo:
        return default
    if maximo is not None:
        numero = min(numero, maximo)
    return numero


def paginar(queryset, page=1, limit=50):
    """
    Paginación por página/límite con la forma
    ``{data, count, page, limit, totalPages}``.
    ``data`` es la rebanada del queryset; el llamador la serializa.
    """
    count = queryset.count()
    offset = (page - 1) * limit
    return {
        'data': list(queryset[offset:offset + limit]),
        'count': count,
        'page': page,
        'limit': limit,
        'totalPages': math.ceil(count / limit) if limit else 0,
    }
