import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Board',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('org_id', models.CharField(db_index=True, max_length=100)),
                ('image_id', models.CharField(max_length=255)),
                ('image_thumb_url', models.TextField()),
                ('image_full_url', models.TextField()),
                ('image_user_name', models.TextField()),
                ('image_link_html', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'board',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='List',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('position', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('board', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lists', to='board.board')),
            ],
            options={
                'db_table': 'list',
                'ordering': ['position'],
            },
        ),
        migrations.CreateModel(
            name='Card',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('position', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('list', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cards', to='board.list')),
            ],
            options={
                'db_table': 'card',
                'ordering': ['position'],
            },
        ),
        migrations.AddConstraint(
            model_name='list',
            constraint=models.UniqueConstraint(deferrable=models.Deferrable['DEFERRED'], fields=('board', 'position'), name='unique_list_position_per_board'),
        ),
        migrations.AddConstraint(
            model_name='card',
            constraint=models.UniqueConstraint(deferrable=models.Deferrable['DEFERRED'], fields=('list', 'position'), name='unique_card_position_per_list'),
        ),
    ]
