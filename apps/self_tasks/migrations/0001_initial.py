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
            name='SelfTask',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('task_date', models.DateField(db_index=True)),
                ('details', models.TextField()),
                ('visibility', models.CharField(choices=[('PUBLIC', 'Public'), ('PRIVATE', 'Private')], default='PUBLIC', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='self_tasks', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'self task',
                'verbose_name_plural': 'self tasks',
                'ordering': ['-task_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', '-task_date'], name='selftask_user_date_idx'),
                ],
            },
        ),
    ]
