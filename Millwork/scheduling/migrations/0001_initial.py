import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='JobStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.SlugField(max_length=100, unique=True)),
                ('display_name', models.CharField(max_length=100)),
                ('color', models.CharField(default='#000000', max_length=7)),
                ('background_color', models.CharField(default='#f3f4f6', max_length=7)),
                ('order_index', models.IntegerField(unique=True)),
                ('is_default', models.BooleanField(default=False)),
                ('is_final', models.BooleanField(default=False)),
                ('target_columns', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Job status',
                'verbose_name_plural': 'Job statuses',
                'ordering': ['order_index'],
            },
        ),
        migrations.CreateModel(
            name='Holiday',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('date', models.DateField(unique=True)),
                ('is_public', models.BooleanField(default=True)),
                ('is_custom', models.BooleanField(default=False)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['date'],
                'indexes': [models.Index(fields=['is_public'], name='holiday_is_public_idx')],
            },
        ),
        migrations.CreateModel(
            name='LeadTime',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('days', models.PositiveIntegerField(default=0)),
                ('direction', models.CharField(choices=[('before', 'Before'), ('after', 'After')], default='before', max_length=10)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('from_status', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lead_times_from', to='scheduling.jobstatus')),
                ('to_status', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lead_times_to', to='scheduling.jobstatus')),
            ],
            options={
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('from_status', 'to_status'), name='unique_lead_time_pair'),
                    models.CheckConstraint(condition=models.Q(('from_status', models.F('to_status')), _negated=True), name='lead_time_distinct_statuses'),
                ],
            },
        ),
    ]
