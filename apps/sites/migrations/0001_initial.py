import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Site',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('name', models.CharField(max_length=200)),
                ('country', models.CharField(db_index=True, max_length=100)),
                ('location_lat', models.FloatField()),
                ('location_lng', models.FloatField()),
                ('type_of_water_body', models.CharField(max_length=100)),
                ('use_of_water', models.CharField(max_length=100)),
                ('water_area', models.FloatField(validators=[django.core.validators.MinValueValidator(0, 'Water area must be positive')])),
                ('wind_speed', models.FloatField(validators=[django.core.validators.MinValueValidator(0, 'Wind speed must be positive')])),
                ('max_water_level', models.CharField(max_length=50)),
                ('min_draw_down_level', models.CharField(max_length=50)),
                ('full_reservoir_level', models.CharField(max_length=50)),
                ('wave_height', models.CharField(max_length=50)),
                ('water_current', models.CharField(max_length=50)),
                ('bathymetry_available', models.BooleanField(default=False)),
                ('bathymetry_file', models.FileField(blank=True, upload_to='sites/reports/%Y/%m/')),
                ('geotechnical_report_available', models.BooleanField(default=False)),
                ('geotechnical_file', models.FileField(blank=True, upload_to='sites/reports/%Y/%m/')),
                ('pfr_available', models.BooleanField(default=False)),
                ('pfr_file', models.FileField(blank=True, upload_to='sites/reports/%Y/%m/')),
                ('dpr_available', models.BooleanField(default=False)),
                ('dpr_file', models.FileField(blank=True, upload_to='sites/reports/%Y/%m/')),
                ('possibility_for_pond_getting_empty', models.BooleanField(default=False)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sites', to='core.company')),
            ],
            options={
                'verbose_name': 'Site',
                'verbose_name_plural': 'Sites',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
    ]
