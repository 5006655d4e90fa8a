import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Lead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('job_code', models.CharField(db_index=True, help_text='Internal job code', max_length=50)),
                ('priority', models.CharField(choices=[('High', 'High'), ('Medium', 'Medium'), ('Low', 'Low')], db_index=True, max_length=10)),
                ('project_name', models.CharField(max_length=200)),
                ('project_location', models.CharField(max_length=200)),
                ('capacity', models.CharField(help_text='Plant capacity, e.g. "10 MWp"', max_length=50)),
                ('country', models.CharField(db_index=True, max_length=100)),
                ('type_of_mooring', models.CharField(choices=[('Catenary', 'Catenary'), ('Taut', 'Taut'), ('Elastic', 'Elastic')], max_length=20)),
                ('method_of_mooring', models.CharField(choices=[('HMPE Rope', 'HMPE Rope'), ('Steel Rope', 'Steel Rope')], max_length=20)),
                ('currency', models.CharField(max_length=10)),
                ('floating_system_price', models.FloatField(default=0)),
                ('anchoring_mooring_price', models.FloatField(default=0)),
                ('supervision_price', models.FloatField(default=0)),
                ('dc_installation_price', models.FloatField(default=0)),
                ('total_price', models.FloatField(default=0, editable=False, help_text='Sum of the price components')),
                ('responsible_person', models.CharField(max_length=150)),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='client_leads', to='core.company')),
                ('consultant', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='consultant_leads', to='core.company')),
                ('developer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='developer_leads', to='core.company')),
                ('end_customer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='end_customer_leads', to='core.company')),
            ],
            options={
                'verbose_name': 'Lead',
                'verbose_name_plural': 'Leads',
                'ordering': ['-created_at'],
                'abstract': False,
                'indexes': [models.Index(fields=['priority', 'created_at'], name='lead_priority_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='DesignConfiguration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('version', models.PositiveIntegerField()),
                ('module_capacity', models.CharField(max_length=50)),
                ('module_dimension', models.CharField(max_length=50)),
                ('inverter_capacity', models.CharField(max_length=50)),
                ('inverter_make', models.CharField(max_length=100)),
                ('configuration', models.CharField(max_length=200)),
                ('anchoring', models.CharField(choices=[('Bank Anchoring', 'Bank Anchoring'), ('Bottom Anchoring', 'Bottom Anchoring'), ('Hybrid Anchoring', 'Hybrid Anchoring')], max_length=30)),
                ('type_of_anchoring', models.CharField(choices=[('Dead Weight', 'Dead Weight'), ('Screw Pile', 'Screw Pile'), ('Drive Pile', 'Drive Pile')], max_length=20)),
                ('lead', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='design_configurations', to='leads.lead')),
            ],
            options={
                'ordering': ['version'],
                'abstract': False,
            },
        ),
        migrations.AddConstraint(
            model_name='designconfiguration',
            constraint=models.UniqueConstraint(fields=('lead', 'version'), name='unique_design_version'),
        ),
    ]
