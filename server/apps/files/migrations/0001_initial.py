from django.db import migrations, models
import django.db.models.deletion
import server.apps.files.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenancy', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Folder',
            fields=[
                ('id', models.CharField(default=server.apps.files.models.generate_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('visibility', models.CharField(choices=[('private', 'Private'), ('public', 'Public')], default='private', max_length=16)),
                ('owner_id', models.CharField(blank=True, db_index=True, default=None, help_text='Owner identity; empty for shared tenant folders', max_length=254, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='folders', to='tenancy.tenant')),
            ],
            options={
                'verbose_name': 'Folder',
                'verbose_name_plural': 'Folders',
                'ordering': ['name'],
                'base_manager_name': 'all_objects',
                'indexes': [models.Index(fields=['tenant', 'owner_id'], name='folders_tenant_owner_idx')],
            },
        ),
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.CharField(default=server.apps.files.models.generate_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('owner_id', models.CharField(db_index=True, help_text='Identity that uploaded the file', max_length=254)),
                ('visibility', models.CharField(choices=[('private', 'Private'), ('public', 'Public')], default='private', max_length=16)),
                ('name', models.CharField(help_text='Display file name', max_length=255)),
                ('storage_key', models.CharField(blank=True, default='', help_text='Object key in storage', max_length=1024)),
                ('size_bytes', models.BigIntegerField(default=0, help_text='File size in bytes')),
                ('mime_type', models.CharField(blank=True, default='', max_length=255)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('ready', 'Ready')], default='pending', max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('folder', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='files', to='files.folder')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='tenancy.tenant')),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-created_at'],
                'base_manager_name': 'all_objects',
                'indexes': [models.Index(fields=['tenant', 'folder'], name='files_tenant_folder_idx'), models.Index(fields=['tenant', 'owner_id'], name='files_tenant_owner_idx')],
            },
        ),
    ]
