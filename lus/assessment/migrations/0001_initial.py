# pylint: skip-file

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Passage',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('title', models.CharField(max_length=255)),
                ('content', models.TextField()),
                ('time_limit', models.PositiveIntegerField(default=180)),
                ('difficulty_level', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(20)])),
                ('created_by', models.CharField(db_index=True, max_length=40)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
            ],
            options={
                'ordering': ['-created', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('question_text', models.TextField()),
                ('correct_answer', models.TextField()),
                ('weight', models.FloatField(default=1.0)),
                ('active', models.BooleanField(db_index=True, default=True)),
                ('passage', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='assessment.passage')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Recording',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('user_id', models.CharField(db_index=True, max_length=40)),
                ('audio_file_path', models.CharField(blank=True, default='', max_length=255)),
                ('duration', models.PositiveIntegerField(default=0)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('assessed', 'Assessed'), ('completed', 'Completed'), ('overdue', 'Overdue')], db_index=True, default='pending', max_length=20)),
                ('passage', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='recordings', to='assessment.passage')),
            ],
            options={
                'ordering': ['-created', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Response',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('user_answer', models.TextField(blank=True, default='')),
                ('is_correct', models.BooleanField(default=False)),
                ('score', models.FloatField(default=0)),
                ('similarity', models.FloatField(default=0)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='responses', to='assessment.question')),
                ('recording', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='assessment.recording')),
            ],
            options={
                'ordering': ['question_id', 'id'],
                'unique_together': {('recording', 'question')},
            },
        ),
        migrations.CreateModel(
            name='Evaluation',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('evaluator_type', models.CharField(db_index=True, max_length=50)),
                ('evaluation_type', models.CharField(choices=[('text', 'Text response'), ('audio', 'Audio recording')], default='text', max_length=10)),
                ('score', models.FloatField()),
                ('confidence', models.FloatField()),
                ('details', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('recording', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='assessment.recording')),
                ('response', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='assessment.response')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Assessment',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('total_score', models.FloatField()),
                ('normalized_score', models.FloatField()),
                ('confidence_score', models.FloatField(blank=True, null=True)),
                ('assessed_by', models.CharField(blank=True, db_index=True, default='', max_length=40)),
                ('completed_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('recording', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assessments', to='assessment.recording')),
            ],
            options={
                'ordering': ['-completed_at', '-id'],
            },
        ),
    ]
