"""Reading entry, history and deletion routes."""
from flask import request, jsonify, current_app
from bplog.models.reading import Reading
from bplog.utils.audit_logger import audit_log
from bplog.utils.classifier import classify
from bplog.utils.dates import parse_iso_date, shift_date, date_label
from bplog.utils.slots import upsert, remove, SlotOutcome
from bplog.utils.validators import validate_reading
from . import readings_bp, get_store, today


def _with_category(reading):
    category = classify(reading.systolic, reading.diastolic)
    rd = reading.to_dict()
    rd['category'] = category.value
    rd['categoryLabel'] = category.label
    rd['categoryClass'] = category.css_class
    return rd


@readings_bp.route('/readings', methods=['GET'])
def list_readings():
    """Most recent readings for the history table."""
    default_limit = current_app.config['HISTORY_LIMIT']
    limit = request.args.get('limit', default_limit, type=int)
    limit = max(1, min(limit, 200))

    readings = get_store().load()

    return jsonify({
        'readings': [_with_category(r) for r in readings[:limit]],
        'total_count': len(readings),
    }), 200


@readings_bp.route('/readings', methods=['POST'])
def create_reading():
    """Save a reading for a date and AM/PM slot. An occupied slot needs replace=true."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({'error': 'Request body is required'}), 400

    errors = validate_reading(data)
    if errors:
        return jsonify({'error': errors}), 400

    heart_rate = data.get('heartRate')
    reading = Reading.create(
        parse_iso_date(data['date']),
        data['time'],
        data['systolic'],
        data['diastolic'],
        heart_rate if heart_rate not in (None, '') else None,
    )

    store = get_store()
    result = upsert(store.load(), reading, replace=data.get('replace') is True)

    if result.conflict:
        return jsonify({
            'error': f'A {reading.time.value} reading already exists for {reading.date.isoformat()}',
            'existing': result.existing.to_dict(),
        }), 409

    store.save(result.readings)

    saved = next(r for r in result.readings if r.slot == reading.slot)
    if result.outcome is SlotOutcome.REPLACED:
        audit_log('UPDATE', 'reading', resource_id=str(saved.id),
                  details={'replaced_id': result.existing.id, 'date': saved.date.isoformat(),
                           'time': saved.time.value})
        return jsonify(_with_category(saved)), 200

    audit_log('CREATE', 'reading', resource_id=str(saved.id),
              details={'date': saved.date.isoformat(), 'time': saved.time.value})
    return jsonify(_with_category(saved)), 201


@readings_bp.route('/readings/<int:reading_id>', methods=['DELETE'])
def delete_reading(reading_id):
    """Delete a reading by id. Deleting an unknown id changes nothing."""
    store = get_store()
    readings = store.load()
    remaining = remove(readings, reading_id)
    deleted = len(remaining) < len(readings)

    if deleted:
        store.save(remaining)
        audit_log('DELETE', 'reading', resource_id=str(reading_id))

    return jsonify({'deleted': deleted}), 200


@readings_bp.route('/classify', methods=['GET'])
def classify_reading():
    """Live category badge for the entry form."""
    systolic = request.args.get('systolic', type=int)
    diastolic = request.args.get('diastolic', type=int)

    if not systolic or not diastolic:
        return jsonify({}), 200

    category = classify(systolic, diastolic)
    return jsonify({
        'category': category.value,
        'label': category.label,
        'class': category.css_class,
    }), 200


@readings_bp.route('/calendar', methods=['GET'])
def calendar():
    """Date stepper: move the selected date by ``step`` days, never past today."""
    current_day = today()
    selected = request.args.get('date')
    step = request.args.get('step', 0, type=int)

    if selected:
        selected_date = parse_iso_date(selected)
        if selected_date is None:
            return jsonify({'error': 'Invalid date format. Use YYYY-MM-DD'}), 400
    else:
        selected_date = current_day

    if selected_date > current_day:
        selected_date = current_day

    selected_date = shift_date(selected_date, step, current_day)

    return jsonify({
        'date': selected_date.isoformat(),
        'label': date_label(selected_date, current_day),
        'max': current_day.isoformat(),
        'isToday': selected_date == current_day,
    }), 200
