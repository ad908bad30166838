import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('room_code', models.CharField(help_text="e.g. 'BH1-101'", max_length=50, unique=True)),
                ('room_number', models.CharField(help_text="e.g. '101', 'A'", max_length=20)),
                ('description', models.TextField(blank=True)),
                ('capacity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('maintenance', models.BooleanField(default=False, help_text='Administrator override. Reported as MAINTENANCE regardless of occupancy.')),
                ('facilities', models.JSONField(blank=True, default=list)),
                ('price_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('price_currency', models.CharField(default='PHP', max_length=3)),
                ('price_period', models.CharField(choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('monthly', 'Monthly')], default='monthly', max_length=10)),
                ('size_area', models.CharField(blank=True, max_length=20)),
                ('size_unit', models.CharField(choices=[('sqm', 'Square meters'), ('sqft', 'Square feet')], default='sqm', max_length=4)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('boarding_property', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='rooms', to='properties.property')),
            ],
            options={
                'verbose_name': 'Room',
                'verbose_name_plural': 'Rooms',
                'ordering': ['room_number'],
                'unique_together': {('boarding_property', 'room_number')},
                'indexes': [
                    models.Index(fields=['boarding_property', 'room_number'], name='room_property_number_idx'),
                    models.Index(fields=['capacity'], name='room_capacity_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(capacity__gte=1), name='room_capacity_at_least_one'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Occupant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tenant_id', models.CharField(max_length=64, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('move_in_date', models.DateField(default=django.utils.timezone.localdate)),
                ('contract_end_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('added_at', models.DateTimeField(default=django.utils.timezone.now, help_text='Insertion order within the room')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='occupants', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Occupant',
                'verbose_name_plural': 'Occupants',
                'ordering': ['added_at', 'id'],
                'indexes': [
                    models.Index(fields=['room', 'added_at'], name='occupant_room_added_idx'),
                ],
            },
        ),
    ]
