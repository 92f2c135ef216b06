from django.contrib import admin

# Customize admin site
admin.site.site_header = "StayDesk - Admin Panel"
admin.site.site_title = "StayDesk Admin"
admin.site.index_title = "Property Management Administration"
