import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('name', models.CharField(db_index=True, help_text='Company name', max_length=200)),
                ('type_of_company', models.CharField(blank=True, help_text='Lookup: COMPANY_TYPE', max_length=100)),
                ('industry', models.CharField(blank=True, help_text='Lookup: INDUSTRY', max_length=100)),
                ('website', models.CharField(blank=True, max_length=200)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('region', models.CharField(blank=True, max_length=100)),
                ('sub_region', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('street_address', models.CharField(blank=True, max_length=255)),
                ('postal_code', models.CharField(blank=True, max_length=20)),
                ('nda_status', models.CharField(blank=True, choices=[('Not Sent', 'Not Sent'), ('Sent', 'Sent'), ('Signed', 'Signed'), ('Expired', 'Expired')], max_length=20)),
                ('nda_signed_date', models.DateField(blank=True, null=True)),
                ('nda_expiry_date', models.DateField(blank=True, null=True)),
                ('mou_status', models.CharField(blank=True, choices=[('Not Sent', 'Not Sent'), ('Sent', 'Sent'), ('Signed', 'Signed'), ('Expired', 'Expired')], max_length=20)),
                ('mou_signed_date', models.DateField(blank=True, null=True)),
                ('mou_expiry_date', models.DateField(blank=True, null=True)),
                ('email_sent', models.CharField(blank=True, default='No', max_length=10)),
                ('email_sent_date', models.DateField(blank=True, null=True)),
                ('lead_status', models.CharField(db_index=True, default='New', max_length=50)),
                ('priority', models.CharField(db_index=True, default='Medium', max_length=20)),
                ('lead_source', models.CharField(blank=True, help_text='Lookup: LEAD_SOURCE', max_length=100)),
                ('who_brought', models.CharField(blank=True, help_text='Lookup: WHO_BROUGHT', max_length=100)),
                ('assigned_to', models.CharField(blank=True, db_index=True, max_length=150)),
                ('created_by', models.CharField(blank=True, max_length=150)),
                ('last_contacted_date', models.DateField(blank=True, null=True)),
                ('next_follow_up_date', models.DateField(blank=True, db_index=True, null=True)),
                ('notes', models.JSONField(blank=True, default=list, help_text='List of free-text notes')),
            ],
            options={
                'verbose_name': 'Company',
                'verbose_name_plural': 'Companies',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Lookup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('type', models.CharField(db_index=True, max_length=50)),
                ('label', models.CharField(max_length=150)),
                ('value', models.CharField(max_length=150)),
            ],
            options={
                'ordering': ['type', 'label'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Contact',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('revision', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every update')),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('designation', models.CharField(blank=True, help_text='Lookup: DESIGNATION', max_length=100)),
                ('role', models.CharField(choices=[('primary', 'Primary'), ('secondary', 'Secondary'), ('other', 'Other')], default='other', max_length=20)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contacts', to='core.company')),
            ],
            options={
                'ordering': ['created_at'],
                'abstract': False,
            },
        ),
        migrations.AddConstraint(
            model_name='lookup',
            constraint=models.UniqueConstraint(fields=('type', 'value'), name='unique_lookup_type_value'),
        ),
    ]
