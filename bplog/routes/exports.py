"""Export and import routes."""
from flask import request, jsonify, Response
from bplog.utils.aggregator import summarize
from bplog.utils.audit_logger import audit_log
from bplog.utils.export import export_filename, generate_readings_csv, generate_readings_pdf
from bplog.utils.slots import dedupe
from bplog.utils.store import parse
from . import readings_bp, get_store, now, today


@readings_bp.route('/export', methods=['GET'])
def export_csv():
    """Download the whole log in the persisted CSV format."""
    readings = get_store().load()
    csv_output = generate_readings_csv(readings)

    audit_log('EXPORT', 'readings_csv', details={'count': len(readings)})

    return Response(
        csv_output.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={export_filename(today())}'}
    )


@readings_bp.route('/export/pdf', methods=['GET'])
def export_pdf():
    """Download a PDF summary report."""
    readings = get_store().load()
    pdf_output = generate_readings_pdf(readings, summarize(readings, now()))

    audit_log('EXPORT', 'readings_pdf', details={'count': len(readings)})

    return Response(
        pdf_output.getvalue(),
        mimetype='application/pdf',
        headers={'Content-Disposition': f'attachment; filename={export_filename(today(), "pdf")}'}
    )


@readings_bp.route('/import', methods=['POST'])
def import_csv():
    """Replace the whole log with the readings in an uploaded CSV. Needs confirm=true."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('csv'), str):
        return jsonify({'error': 'csv text is required'}), 400

    imported = dedupe(parse(data['csv']))
    if not imported:
        return jsonify({'error': 'No valid data found in CSV'}), 400

    if data.get('confirm') is not True:
        return jsonify({
            'count': len(imported),
            'message': f'Import {len(imported)} readings? This will replace current data.',
        }), 409

    get_store().save(imported)

    audit_log('IMPORT', 'readings_csv', details={'count': len(imported)})

    return jsonify({'imported': len(imported)}), 200
