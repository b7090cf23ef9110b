from rest_framework.renderers import BrowsableAPIRenderer


# Operator endpoints take no form input in the browsable API, members only
# get forms for the endpoints that place picks
class NoHTMLFormBrowsableAPIRenderer(BrowsableAPIRenderer):

    def get_rendered_html_form(self, data, view, method, request):
        if request.path.endswith(('/pick', '/bulk-pick')):
            return super().get_rendered_html_form(data, view, method, request)
        return ''

    def get_raw_data_form(self, data, view, method, request):
        return
