"""
Command-line blood pressure logger.

    bplog <systolic> <diastolic> [heartrate] [AM|PM] [±N | YYYY-MM-DD]
    bplog --view [n]
    bplog --stats
"""
import os
from datetime import date, datetime
import click

from bplog.models.reading import Reading, TimeSlot
from bplog.utils.aggregator import summarize
from bplog.utils.audit_logger import audit_log, configure_audit_logging
from bplog.utils.classifier import classify
from bplog.utils.dates import ISO_DATE_RE, is_day_offset, resolve_date_arg
from bplog.utils.slots import upsert, SlotOutcome
from bplog.utils.store import FileStore
from bplog.utils.validators import validate_reading

DEFAULT_VIEW_COUNT = 10

USAGE = """
  BP Logger

  Usage:
    bplog <systolic> <diastolic> [heartrate] [AM|PM] [date]

  Examples:
    bplog 120 80              Today, AM, no HR
    bplog 118 78 72 PM        Today, PM, with HR
    bplog 120 80 AM -1        Yesterday morning
    bplog 118 78 72 PM -3     3 days ago evening
    bplog 120 80 +1           Tomorrow morning
    bplog 120 80 AM 2024-12-25

  Commands:
    --view [n]     View last n readings (default 10)
    --stats        Show statistics
    --help         Show this help

  Options:
    --yes          Replace an existing reading without asking
    --file PATH    Data file (default: $BP_DATA_FILE or bp-data.csv)

  Data: {path}
"""


def sniff_args(rest):
    """
    Sort the optional trailing arguments by shape: an AM/PM token, a signed
    day offset, an ISO date, and otherwise a heart rate. Order does not matter.
    """
    heart_rate, time_slot, date_arg = None, TimeSlot.AM, None

    for arg in rest:
        if arg.upper() in ('AM', 'PM'):
            time_slot = TimeSlot.parse(arg)
        elif is_day_offset(arg):
            date_arg = arg
        elif ISO_DATE_RE.match(arg):
            date_arg = arg
        else:
            try:
                int(arg)
            except ValueError:
                continue
            heart_rate = arg

    return heart_rate, time_slot, date_arg


def add_reading(store, systolic, diastolic, heart_rate, time_slot, date_arg, assume_yes=False):
    target_date = resolve_date_arg(date_arg, date.today())
    payload = {
        'systolic': systolic,
        'diastolic': diastolic,
        'heartRate': heart_rate,
        'date': target_date.isoformat(),
        'time': time_slot.value,
    }
    errors = validate_reading(payload)
    if errors:
        for error in errors:
            click.echo(f'  Error: {error}')
        return 1

    reading = Reading.create(target_date, time_slot, systolic, diastolic, heart_rate)
    readings = store.load()
    result = upsert(readings, reading)

    if result.conflict:
        prompt = f'  Replace existing {reading.time.value} reading for {target_date.isoformat()}?'
        if not assume_yes and not click.confirm(prompt, default=True):
            click.echo('\n  Kept existing reading.\n')
            return 0
        click.echo(f'\n  Replacing existing {reading.time.value} reading for {target_date.isoformat()}')
        result = upsert(readings, reading, replace=True)

    store.save(result.readings)

    saved = next(r for r in result.readings if r.slot == reading.slot)
    if result.outcome is SlotOutcome.REPLACED:
        audit_log('UPDATE', 'reading', resource_id=str(saved.id),
                  details={'replaced_id': result.existing.id})
    else:
        audit_log('CREATE', 'reading', resource_id=str(saved.id))

    hr_str = f' HR:{saved.heart_rate}' if saved.heart_rate else ''
    status = classify(saved.systolic, saved.diastolic).collapsed_label
    click.echo(f'\n  Saved: {saved.systolic}/{saved.diastolic}{hr_str} [{saved.time.value}] '
               f'{saved.date.isoformat()} - {status}\n')
    return 0


def view_readings(store, count=DEFAULT_VIEW_COUNT):
    readings = store.load()

    if not readings:
        click.echo('\n  No readings yet.\n')
        return

    click.echo('\n  DATE        TIME   BP         HR    STATUS')
    click.echo('  ' + '-' * 50)

    for r in readings[:count]:
        bp = f'{r.systolic}/{r.diastolic}'.ljust(10)
        hr = str(r.heart_rate or '-').ljust(5)
        status = classify(r.systolic, r.diastolic).collapsed_label
        click.echo(f'  {r.date.isoformat()}  {r.time.value.ljust(4)}   {bp} {hr} {status}')

    click.echo('')


def show_stats(store):
    readings = store.load()

    if not readings:
        click.echo('\n  No readings yet.\n')
        return

    stats = summarize(readings, datetime.now())
    avg = stats.average

    click.echo('\n  BP Statistics')
    click.echo('  ' + '-' * 30)
    click.echo(f'  Total readings:  {stats.total}')
    click.echo(f'  Last 7 days:     {stats.last_7_count} ({stats.last_7_days} day(s))')
    click.echo('')
    click.echo(f'  Average BP:      {avg.systolic}/{avg.diastolic} ({stats.category.collapsed_label})')
    if avg.heart_rate is not None:
        click.echo(f'  Average HR:      {avg.heart_rate} bpm')
    click.echo('')
    click.echo(f'  Highest:         {stats.range.systolic_max}/{stats.range.diastolic_max}')
    click.echo(f'  Lowest:          {stats.range.systolic_min}/{stats.range.diastolic_min}')
    if stats.trend is not None:
        click.echo(f'  7-day trend:     {stats.trend:+d} mmHg ({stats.trend_direction.value})')
    else:
        click.echo('  7-day trend:     n/a')
    click.echo('')


@click.command(context_settings={'ignore_unknown_options': True, 'help_option_names': []})
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.option('--view', '-v', 'view', type=int, is_flag=False, flag_value=DEFAULT_VIEW_COUNT,
              default=None, help='View last n readings.')
@click.option('--stats', '-s', 'stats', is_flag=True, help='Show statistics.')
@click.option('--help', '-h', 'show_help', is_flag=True, help='Show usage.')
@click.option('--yes', '-y', 'assume_yes', is_flag=True, help='Replace without asking.')
@click.option('--file', 'data_file', envvar='BP_DATA_FILE', default='bp-data.csv',
              type=click.Path(dir_okay=False), help='Data file.')
@click.pass_context
def main(ctx, args, view, stats, show_help, assume_yes, data_file):
    """Log and review blood pressure readings."""
    configure_audit_logging(os.getenv('AUDIT_LOG_FILE'))
    store = FileStore(data_file)

    if show_help or (not args and view is None and not stats):
        click.echo(USAGE.format(path=os.path.abspath(data_file)))
        return

    if view is not None:
        view_readings(store, view if view > 0 else DEFAULT_VIEW_COUNT)
        return

    if stats:
        show_stats(store)
        return

    if len(args) < 2:
        click.echo('  Error: systolic and diastolic required')
        ctx.exit(1)

    systolic, diastolic, rest = args[0], args[1], args[2:]
    heart_rate, time_slot, date_arg = sniff_args(rest)

    ctx.exit(add_reading(store, systolic, diastolic, heart_rate, time_slot, date_arg, assume_yes))


if __name__ == '__main__':
    main()
