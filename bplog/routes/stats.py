"""Summary statistics and chart routes."""
from flask import jsonify
from bplog.utils.aggregator import summarize, daily_series, series_to_chart
from . import readings_bp, get_store, now, today


@readings_bp.route('/stats', methods=['GET'])
def get_stats():
    """Aggregate statistics over the whole log."""
    stats = summarize(get_store().load(), now())
    return jsonify(stats.to_dict()), 200


@readings_bp.route('/chart', methods=['GET'])
def get_chart():
    """14-day daily means. Days without readings are null, never zero."""
    series = daily_series(get_store().load(), today())
    return jsonify(series_to_chart(series)), 200
