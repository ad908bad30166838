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
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('actor', models.CharField(blank=True, help_text="Actor identifier when there is no user (e.g. 'system', an admin id)", max_length=150)),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete'), ('MAINTENANCE', 'Maintenance'), ('ASSIGN_TENANT', 'Assign Tenant'), ('VACATE', 'Vacate'), ('SUBMIT_REQUEST', 'Submit Request'), ('APPROVE_REQUEST', 'Approve Request'), ('REJECT_REQUEST', 'Reject Request'), ('OCCUPANCY_CHANGED', 'Occupancy Changed')], db_index=True, max_length=20)),
                ('resource_type', models.CharField(choices=[('Property', 'Property'), ('Room', 'Room'), ('Occupant', 'Occupant'), ('RoomRequest', 'Room Request')], db_index=True, max_length=50)),
                ('resource_id', models.CharField(blank=True, db_index=True, max_length=64)),
                ('description', models.TextField(help_text='Human-readable description of the action')),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('user_agent', models.TextField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, default=dict, help_text='Additional context data')),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, help_text='User who performed the action', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'ordering': ['-timestamp', '-id'],
                'indexes': [
                    models.Index(fields=['user', '-timestamp'], name='audit_user_time_idx'),
                    models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
                    models.Index(fields=['action', '-timestamp'], name='audit_action_time_idx'),
                ],
            },
        ),
    ]
