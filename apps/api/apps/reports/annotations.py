"""
Injection site map summaries for the visit report.
"""
import json

from .exceptions import MalformedData

FALLBACK_LINE = 'Annotation data present but unreadable'


def _point_lines(view, points):
    if isinstance(points, list) and points:
        return [f"  {view}: {len(points)} injection point(s)"]
    return []


def summarize_annotation(view, points_json):
    """
    Summary lines for one annotation record.

    points_json may map view names to point lists, or be a bare point list
    for the record's own diagram view. Anything else raises MalformedData.
    """
    try:
        data = json.loads(points_json or '{}')
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedData('Annotation points are not valid JSON') from exc

    if isinstance(data, dict):
        views = [str(key) for key in data.keys()]
        if not views:
            return []
        lines = [f"Views: {', '.join(views)}"]
        for key in views:
            lines.extend(_point_lines(key, data[key]))
        return lines

    if isinstance(data, list):
        label = view or 'unspecified'
        return [f"Views: {label}"] + _point_lines(label, data)

    raise MalformedData(f'Unexpected annotation payload type: {type(data).__name__}')
