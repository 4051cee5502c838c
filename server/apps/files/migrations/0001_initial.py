import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('kind', models.CharField(choices=[('folder', 'Folder'), ('file', 'File'), ('image', 'Image')], max_length=16)),
                ('parent_id', models.BigIntegerField(db_index=True, default=0, help_text='Id of the containing folder, 0 for root')),
                ('is_public', models.BooleanField(default=False)),
                ('content_key', models.CharField(blank=True, default='', help_text='Key of the stored content, empty for folders', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['user', 'parent_id', 'id'], name='files_user_parent_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(models.Q(('kind', 'folder'), _negated=True), ('content_key', ''), _connector='OR'), name='files_folder_without_content')],
            },
        ),
    ]
