"""Initial migration: the ``multicache`` key/value table.

On PostgreSQL the table is UNLOGGED: cache rows skip the write-ahead log and
are truncated after a crash. Other vendors (SQLite in tests) get a plain table
with the same columns.
"""

from django.db import migrations, models

TABLE = "multicache"


def create_table(apps, schema_editor):
    quote = schema_editor.quote_name
    unlogged = "UNLOGGED " if schema_editor.connection.vendor == "postgresql" else ""
    columns = f"{quote('key')} text NOT NULL PRIMARY KEY, {quote('value')} text NOT NULL"
    schema_editor.execute(f"CREATE {unlogged}TABLE {quote(TABLE)} ({columns})")


def drop_table(apps, schema_editor):
    schema_editor.execute(f"DROP TABLE {schema_editor.quote_name(TABLE)}")


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.SeparateDatabaseAndState(
            state_operations=[
                migrations.CreateModel(
                    name="StoreEntry",
                    fields=[
                        ("key", models.TextField(primary_key=True, serialize=False)),
                        ("value", models.TextField()),
                    ],
                    options={
                        "db_table": TABLE,
                    },
                ),
            ],
            database_operations=[
                migrations.RunPython(create_table, drop_table),
            ],
        ),
    ]
