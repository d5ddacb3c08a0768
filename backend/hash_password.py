import getpass
import sys

from werkzeug.security import generate_password_hash

if __name__ == '__main__':
    # Prints a value for the ADMIN_PASSWORD_HASH environment variable
    if len(sys.argv) > 1:
        password = sys.argv[1]
    else:
        password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        sys.exit(1)
    print(generate_password_hash(password))
