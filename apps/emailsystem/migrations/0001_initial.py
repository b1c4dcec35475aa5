# Generated manually for emailsystem

import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='EmailTemplate',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.CharField(blank=True, help_text="Stable identifier referenced by triggers, e.g. 'welcome'", max_length=100, primary_key=True, serialize=False, verbose_name='Template ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('subject', models.CharField(max_length=500, verbose_name='Subject')),
                ('body', models.TextField(help_text='HTML body; wrapped in the email layout when sent', verbose_name='Body')),
                ('variables', models.JSONField(blank=True, default=list, help_text='Documented placeholders: list of {name, description, example}', verbose_name='Variables')),
            ],
            options={
                'verbose_name': 'Email template',
                'verbose_name_plural': 'Email templates',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='EmailTrigger',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.CharField(blank=True, max_length=100, primary_key=True, serialize=False, verbose_name='Trigger ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('enabled', models.BooleanField(db_index=True, default=True, verbose_name='Enabled')),
                ('template_id', models.CharField(max_length=100, verbose_name='Template ID')),
                ('trigger_type', models.CharField(choices=[('firestore', 'Document change'), ('manual', 'Manual')], default='firestore', max_length=20, verbose_name='Trigger type')),
                ('collection', models.CharField(blank=True, max_length=100, verbose_name='Collection')),
                ('event', models.CharField(blank=True, choices=[('create', 'Create'), ('update', 'Update'), ('delete', 'Delete')], max_length=10, verbose_name='Event')),
                ('conditions', models.JSONField(blank=True, default=list, help_text='List of {field, operator, value}; all must match', verbose_name='Conditions')),
                ('recipient_field', models.CharField(default='email', help_text='Document field holding the recipient address', max_length=100, verbose_name='Recipient field')),
                ('data_mapping', models.JSONField(blank=True, default=dict, help_text='Template variable -> document field name or {{expression}}', verbose_name='Data mapping')),
                ('last_triggered', models.DateTimeField(blank=True, null=True, verbose_name='Last triggered')),
                ('send_count', models.PositiveBigIntegerField(default=0, verbose_name='Send attempts')),
            ],
            options={
                'verbose_name': 'Email trigger',
                'verbose_name_plural': 'Email triggers',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['collection', 'event', 'enabled'], name='emailsystem_collect_5b1f0e_idx')],
            },
        ),
        migrations.CreateModel(
            name='EmailLogEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('trigger_id', models.CharField(blank=True, db_index=True, help_text='Empty for manually issued sends', max_length=100, null=True, verbose_name='Trigger ID')),
                ('template_id', models.CharField(db_index=True, max_length=100, verbose_name='Template ID')),
                ('template_name', models.CharField(max_length=200, verbose_name='Template name')),
                ('recipient', models.CharField(db_index=True, max_length=254, verbose_name='Recipient')),
                ('subject', models.CharField(max_length=500, verbose_name='Subject')),
                ('status', models.CharField(choices=[('sent', 'Sent'), ('failed', 'Failed')], db_index=True, max_length=10, verbose_name='Status')),
                ('error', models.TextField(blank=True, verbose_name='Error')),
                ('sent_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Sent at')),
                ('sent_by', models.CharField(max_length=150, verbose_name='Sent by')),
                ('document_id', models.CharField(blank=True, max_length=100, verbose_name='Document ID')),
                ('collection', models.CharField(blank=True, max_length=100, verbose_name='Collection')),
            ],
            options={
                'verbose_name': 'Email log entry',
                'verbose_name_plural': 'Email log entries',
                'ordering': ['-sent_at'],
                'indexes': [
                    models.Index(fields=['-sent_at'], name='emailsystem_sent_at_3c9d2a_idx'),
                    models.Index(fields=['status', '-sent_at'], name='emailsystem_status_8e4b71_idx'),
                ],
            },
        ),
    ]
