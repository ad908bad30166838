import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models
from django.db.models import F, Q


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='RoomRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('request_type', models.CharField(choices=[('NEW_ASSIGNMENT', 'New Assignment'), ('TRANSFER', 'Transfer'), ('MOVE_OUT', 'Move Out')], max_length=20)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected')], default='PENDING', max_length=20)),
                ('tenant_id', models.CharField(db_index=True, max_length=64)),
                ('tenant_name', models.CharField(max_length=255)),
                ('tenant_email', models.EmailField(blank=True, max_length=254)),
                ('tenant_phone', models.CharField(blank=True, max_length=30)),
                ('move_in_date', models.DateField(blank=True, null=True)),
                ('planned_move_out_date', models.DateField(blank=True, null=True)),
                ('reason', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('requested_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('admin_id', models.CharField(blank=True, max_length=64)),
                ('admin_message', models.TextField(blank=True)),
                ('responded_at', models.DateTimeField(blank=True, null=True)),
                ('source_room', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='outgoing_requests', to='rooms.room')),
                ('target_room', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='incoming_requests', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Room Request',
                'verbose_name_plural': 'Room Requests',
                'ordering': ['-requested_at', '-id'],
                'indexes': [
                    models.Index(fields=['status'], name='roomreq_status_idx'),
                    models.Index(fields=['request_type', 'status'], name='roomreq_type_status_idx'),
                    models.Index(fields=['tenant_id', 'status'], name='roomreq_tenant_status_idx'),
                    models.Index(fields=['-requested_at'], name='roomreq_requested_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            (
                                Q(request_type='NEW_ASSIGNMENT')
                                & Q(target_room__isnull=False)
                                & Q(source_room__isnull=True)
                                & Q(planned_move_out_date__isnull=True)
                            )
                            | (
                                Q(request_type='TRANSFER')
                                & Q(source_room__isnull=False)
                                & Q(target_room__isnull=False)
                                & ~Q(source_room=F('target_room'))
                                & Q(planned_move_out_date__isnull=True)
                            )
                            | (
                                Q(request_type='MOVE_OUT')
                                & Q(source_room__isnull=False)
                                & Q(target_room__isnull=True)
                                & Q(planned_move_out_date__isnull=False)
                            )
                        ),
                        name='room_request_variant_shape',
                    ),
                    models.CheckConstraint(
                        condition=(
                            Q(status='PENDING', responded_at__isnull=True)
                            | (~Q(status='PENDING') & Q(responded_at__isnull=False))
                        ),
                        name='room_request_response_iff_terminal',
                    ),
                    models.UniqueConstraint(
                        condition=Q(status='PENDING'),
                        fields=('tenant_id', 'request_type'),
                        name='room_request_one_pending_per_family',
                    ),
                ],
            },
        ),
    ]
