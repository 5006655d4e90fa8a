from django.db import models

from apps.core.models import Company, TimeStampedModel


class Lead(TimeStampedModel):

    PRIORITY_CHOICES = [
        ('High', 'High'),
        ('Medium', 'Medium'),
        ('Low', 'Low'),
    ]

    MOORING_TYPE_CHOICES = [
        ('Catenary', 'Catenary'),
        ('Taut', 'Taut'),
        ('Elastic', 'Elastic'),
    ]

    MOORING_METHOD_CHOICES = [
        ('HMPE Rope', 'HMPE Rope'),
        ('Steel Rope', 'Steel Rope'),
    ]

    # Basic Information
    job_code = models.CharField(max_length=50, db_index=True, help_text='Internal job code')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, db_index=True)
    project_name = models.CharField(max_length=200)
    project_location = models.CharField(max_length=200)
    capacity = models.CharField(max_length=50, help_text='Plant capacity, e.g. "10 MWp"')
    country = models.CharField(max_length=100, db_index=True)

    # Parties (all companies)
    client = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='client_leads')
    developer = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='developer_leads')
    consultant = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='consultant_leads')
    end_customer = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='end_customer_leads')

    # Mooring technique
    type_of_mooring = models.CharField(max_length=20, choices=MOORING_TYPE_CHOICES)
    method_of_mooring = models.CharField(max_length=20, choices=MOORING_METHOD_CHOICES)

    # Offered price
    currency = models.CharField(max_length=10)
    floating_system_price = models.FloatField(default=0)
    anchoring_mooring_price = models.FloatField(default=0)
    supervision_price = models.FloatField(default=0)
    dc_installation_price = models.FloatField(default=0)
    total_price = models.FloatField(default=0, editable=False, help_text='Sum of the price components')

    responsible_person = models.CharField(max_length=150)

    class Meta(TimeStampedModel.Meta):
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'
        indexes = [
            models.Index(fields=['priority', 'created_at'], name='lead_priority_created_idx'),
        ]

    def __str__(self):
        return f"{self.job_code} - {self.project_name}"

    def save(self, *args, **kwargs):
        self.total_price = (
            self.floating_system_price
            + self.anchoring_mooring_price
            + self.supervision_price
            + self.dc_installation_price
        )
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = {*update_fields, 'total_price'}
        super().save(*args, **kwargs)

    def add_design_version(self, **fields):
        """
        Append a design configuration

        Versions are numbered 1, 2, 3... in the order they are added.
        """
        version = self.design_configurations.count() + 1
        return self.design_configurations.create(version=version, **fields)


class DesignConfiguration(TimeStampedModel):

    ANCHORING_CHOICES = [
        ('Bank Anchoring', 'Bank Anchoring'),
        ('Bottom Anchoring', 'Bottom Anchoring'),
        ('Hybrid Anchoring', 'Hybrid Anchoring'),
    ]

    ANCHOR_TYPE_CHOICES = [
        ('Dead Weight', 'Dead Weight'),
        ('Screw Pile', 'Screw Pile'),
        ('Drive Pile', 'Drive Pile'),
    ]

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name='design_configurations')
    version = models.PositiveIntegerField()
    module_capacity = models.CharField(max_length=50)
    module_dimension = models.CharField(max_length=50)
    inverter_capacity = models.CharField(max_length=50)
    inverter_make = models.CharField(max_length=100)
    configuration = models.CharField(max_length=200)
    anchoring = models.CharField(max_length=30, choices=ANCHORING_CHOICES)
    type_of_anchoring = models.CharField(max_length=20, choices=ANCHOR_TYPE_CHOICES)

    class Meta(TimeStampedModel.Meta):
        ordering = ['version']
        constraints = [
            models.UniqueConstraint(fields=['lead', 'version'], name='unique_design_version'),
        ]

    def __str__(self):
        return f"{self.lead.job_code} v{self.version}"
