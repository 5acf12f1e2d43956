import yaml

SETTINGS_PATH = 'config/settings.yml'
HTTPS_PORT = 9441
MAIL_USER = 'redmine'

class SettingsError(Exception):
    pass

class LoadError(SettingsError):
    pass

class WriteError(SettingsError):
    pass

class MissingKeyError(SettingsError):
    def __init__(self, key):
        super().__init__("Setting '%s' has no default" % key)
        self.key = key

def overrides(hostname):
    # Ordered as on the Redmine administration tabs. Keep the
    # self_registration value a string, the rest of the flags are ints.
    return [
        # General
        ('host_name', '%s:%d' % (hostname, HTTPS_PORT)),
        ('protocol', 'https'),
        ('text_formatting', 'common_mark'),
        # Display
        ('force_default_language_for_anonymous', 1),
        ('force_default_language_for_loggedin', 1),
        # Authentication
        ('login_required', 1),
        ('self_registration', '0'),
        ('lost_password', 0),
        ('twofa', 0),
        # Projects
        ('default_projects_public', 0),
        # Users
        ('max_additional_emails', 0),
        ('email_domains_allowed', hostname),
        ('unsubscribe', 0),
        # Issue tracking
        ('cross_project_issue_relations', 1),
        ('link_copied_issue', 'no'),
        ('cross_project_subtasks', 'system'),
        ('default_issue_start_date_to_creation_date', 0),
        ('display_subprojects_issues', 0),
        # Email notifications
        ('mail_from', '%s@%s' % (MAIL_USER, hostname)),
    ]

def load(path):
    try:
        with open(path, encoding = 'utf-8') as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise LoadError("Can't read %s: %s" % (path, e.strerror or e)) from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise LoadError("Can't parse %s: %s" % (path, e)) from e

    if not isinstance(doc, dict):
        raise LoadError("%s is not a settings mapping" % path)

    return doc

def setting(doc, key):
    s = doc.get(key)
    if not isinstance(s, dict) or 'default' not in s:
        raise MissingKeyError(key)
    return s

def apply(doc, hostname):
    for key, value in overrides(hostname):
        setting(doc, key)['default'] = value
    return doc

def dump(doc):
    # Comments in the source file are not carried over
    return yaml.safe_dump(doc, default_flow_style = False,
                          sort_keys = False, allow_unicode = True)

def save(path, doc):
    # Render and encode first, a failure here must not leave the file truncated
    try:
        data = dump(doc).encode('utf-8')
        with open(path, 'wb') as f:
            f.write(data)
    except UnicodeError as e:
        raise WriteError("Can't write %s: %s" % (path, e)) from e
    except OSError as e:
        raise WriteError("Can't write %s: %s" % (path, e.strerror or e)) from e
