# meditime/cli.py
import click
from flask import current_app
from flask.cli import with_appcontext

from meditime.extensions import db
from meditime.services.medicine_importer import import_medicines, read_csv_rows
from meditime.services.medicine_store import MedicineStore


@click.command("import-medicines")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@with_appcontext
def import_medicines_command(csv_path):
    """Classify and import medicines from a CSV export."""
    rows = read_csv_rows(csv_path)
    current_app.logger.info("Parsed %d rows from %s", len(rows), csv_path)

    result = import_medicines(MedicineStore(db.session), rows)

    click.echo(f"Imported: {result.imported}")
    click.echo(f"Skipped:  {result.skipped}")
    click.echo(f"Total:    {result.total}")


def register_commands(app):
    app.cli.add_command(import_medicines_command)
