from peewee import (
    AutoField,
    CharField,
    CompositeKey,
    DateField,
    Database,
    ForeignKeyField,
    Model,
    TextField,
)


class TaskModel(Model):
    id = AutoField()
    title = CharField()
    description = TextField()
    priority = CharField()
    due_date = DateField()
    status = CharField(max_length=20)

    class Meta:
        table_name = "tasks"


class TagModel(Model):
    id = AutoField()
    name = CharField(unique=True)

    class Meta:
        table_name = "tags"


class TaskTagModel(Model):
    task = ForeignKeyField(TaskModel, column_name="task_id", on_delete="CASCADE")
    tag = ForeignKeyField(TagModel, column_name="tag_id")

    class Meta:
        table_name = "task_tags"
        primary_key = CompositeKey("task", "tag")


MODELS = (TaskModel, TagModel, TaskTagModel)


def init_db(database: Database) -> None:
    """Create missing tables on `database`. Models stay unbound afterwards."""
    with database.bind_ctx(MODELS), database.connection_context():
        database.create_tables(MODELS, safe=True)
