from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('org_id', models.CharField(max_length=100)),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete')], max_length=10)),
                ('entity_id', models.CharField(max_length=100)),
                ('entity_type', models.CharField(choices=[('BOARD', 'Board'), ('LIST', 'List'), ('CARD', 'Card')], max_length=10)),
                ('entity_title', models.CharField(max_length=255)),
                ('user_id', models.CharField(max_length=100)),
                ('user_image', models.URLField(blank=True, max_length=500)),
                ('user_name', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'audit_log',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['org_id', '-created_at'], name='audit_log_org_created_idx'),
                    models.Index(fields=['org_id', 'entity_type', 'entity_id'], name='audit_log_org_entity_idx'),
                ],
            },
        ),
    ]
