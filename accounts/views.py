# accounts/views.py

# Import JsonResponse from django.http because every view here answers with JSON.
from django.http import JsonResponse
# Import login, logout, authenticate from django.contrib.auth because the session is the API's identity.
from django.contrib.auth import login, logout, authenticate, update_session_auth_hash
from django.views.decorators.csrf import ensure_csrf_cookie

from core.exceptions import ValidationFailed
from core.utils import json_view, read_json, validate
from . import services
from .forms import RegistrationForm, LoginForm, ConsentForm, ProfileForm, ChangePasswordForm, DeleteAccountForm


@json_view(methods=('POST',), login_required=False)
def register_view(request):
    data = validate(RegistrationForm, read_json(request))
    user = services.register_user(**data)
    login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    return JsonResponse({'user': user.as_dict()}, status=201)


@json_view(methods=('POST',), login_required=False)
def login_view(request):
    data = validate(LoginForm, read_json(request))
    user = authenticate(request, email=data['email'], password=data['password'])
    if user is None:
        raise ValidationFailed('Invalid email or password')
    login(request, user)
    return JsonResponse({'user': user.as_dict()})


@json_view(methods=('POST',))
def logout_view(request):
    logout(request)
    return JsonResponse({'success': True})


# Current user, profile edits, or account deletion. Also hands out the CSRF cookie, even to anonymous callers.
@ensure_csrf_cookie
@json_view(methods=('GET', 'PATCH', 'DELETE'))
def me_view(request):
    if request.method == 'DELETE':
        data = validate(DeleteAccountForm, read_json(request))
        services.delete_account(request.user, data['password'])
        logout(request)
        return JsonResponse({'success': True, 'message': 'Account deleted successfully'})

    if request.method == 'PATCH':
        data = validate(ProfileForm, read_json(request))
        user = services.update_profile(request.user, **data)
        return JsonResponse({'user': user.as_dict(), 'message': 'Profile updated successfully'})

    return JsonResponse({'user': request.user.as_dict()})


@json_view(methods=('POST',))
def change_password_view(request):
    data = validate(ChangePasswordForm, read_json(request))
    user = services.change_password(request.user, data['current_password'], data['new_password'])
    # Keep this session logged in after the hash changes
    update_session_auth_hash(request, user)
    return JsonResponse({'success': True, 'message': 'Password changed successfully'})


@json_view(methods=('POST',))
def consent_view(request):
    data = validate(ConsentForm, read_json(request))
    user = services.update_consent(request.user, data['consent'])
    return JsonResponse({'user': user.as_dict()})
